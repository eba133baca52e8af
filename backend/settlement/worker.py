import logging
from typing import Any

from arq import cron

from settlement.core.config import settings
from settlement.core.errors import AppError
from settlement.services.billing_client import BillingClient
from settlement.services.settlement_service import SettlementService
from settlement.tasks import redis_settings

logger = logging.getLogger(__name__)


async def settle_pending_invoices_task(ctx: dict[str, Any]) -> int:
    """Background task: settle every pending invoice.

    Runs daily at SETTLEMENT_CRON_HOUR. Returns the number of payments
    charged; a failed run raises so arq records the job as failed.
    """
    async with BillingClient() as client:
        service = SettlementService(client)
        try:
            statuses = await service.settle_pending()
        except AppError as exc:
            logger.error("Scheduled settlement failed: %s", exc)
            raise

    logger.info("Settled %d payment(s)", len(statuses))
    return len(statuses)


class WorkerSettings:
    functions = [settle_pending_invoices_task]
    cron_jobs = [
        cron(
            settle_pending_invoices_task,
            hour=settings.SETTLEMENT_CRON_HOUR,
            minute=0,
            run_at_startup=False,
        ),
    ]
    redis_settings = redis_settings
