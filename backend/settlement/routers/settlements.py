"""Settlement API endpoints."""

from collections.abc import AsyncIterator

from fastapi import APIRouter, Depends, HTTPException

from settlement.core.errors import AppError, NotFoundError
from settlement.schemas.payment import PaidPaymentStatus, SettlementPlanEntry
from settlement.services.billing_client import BillingClient
from settlement.services.settlement_service import SettlementService
from settlement.tasks import enqueue_settlement_run

router = APIRouter()


async def get_settlement_service() -> AsyncIterator[SettlementService]:
    async with BillingClient() as client:
        yield SettlementService(client)


def _to_http_exception(exc: AppError) -> HTTPException:
    status_code = 404 if isinstance(exc, NotFoundError) else 502
    return HTTPException(status_code=status_code, detail=exc.to_dict())


@router.post("/", response_model=list[PaidPaymentStatus])
async def run_settlement(
    service: SettlementService = Depends(get_settlement_service),
) -> list[PaidPaymentStatus]:
    """Settle every pending invoice."""
    try:
        return await service.settle_pending()
    except AppError as exc:
        raise _to_http_exception(exc) from exc


@router.post(
    "/schedule",
    status_code=202,
    summary="Enqueue settlement run",
    description="Enqueue a background settlement run on the arq worker.",
)
async def schedule_settlement() -> dict[str, str | None]:
    job = await enqueue_settlement_run()
    return {"job_id": job.job_id if job is not None else None}


@router.post("/preview", response_model=list[SettlementPlanEntry])
async def preview_settlement(
    service: SettlementService = Depends(get_settlement_service),
) -> list[SettlementPlanEntry]:
    """Plan the charges of a settlement without paying anything."""
    try:
        return await service.preview_pending()
    except AppError as exc:
        raise _to_http_exception(exc) from exc
