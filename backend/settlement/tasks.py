from typing import Any

from arq import create_pool
from arq.connections import ArqRedis, RedisSettings
from arq.jobs import Job

from settlement.core.config import settings

# Queue shared with settlement.worker
redis_settings = RedisSettings.from_dsn(settings.REDIS_URL)


async def get_redis_pool() -> ArqRedis:
    """Open a connection pool to the settlement queue at REDIS_URL."""
    return await create_pool(redis_settings)


async def enqueue_task(task_name: str, *args: Any, **kwargs: Any) -> Job | None:
    """Queue ``task_name`` for the settlement worker.

    The pool is opened for this one call and always closed afterwards.
    Returns None when arq refuses the job because one with the same id is
    already queued.
    """
    pool = await get_redis_pool()
    try:
        return await pool.enqueue_job(task_name, *args, **kwargs)
    finally:
        await pool.close()


async def enqueue_settlement_run() -> Job | None:
    """Ask the worker to settle every pending invoice outside the request cycle."""
    return await enqueue_task("settle_pending_invoices_task")
