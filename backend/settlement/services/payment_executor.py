"""Executes allocated charges against the payment endpoint."""

import logging
from collections.abc import Iterable
from decimal import Decimal

from settlement.core.errors import AppError
from settlement.schemas.invoice import PendingPayment
from settlement.schemas.payment import PaidPaymentStatus
from settlement.services.billing_client import BillingClient
from settlement.services.discount_allocation import Allocation

logger = logging.getLogger(__name__)


class PaymentExecutor:
    """Issues exactly one pay call per allocated payment."""

    def __init__(self, client: BillingClient):
        self.client = client

    async def execute(self, payment: PendingPayment, charge_amount: Decimal) -> PaidPaymentStatus:
        """Charge a single payment.

        Raises:
            AppError: If the call fails or the reply cannot be interpreted.
        """
        logger.debug("Paying %s with amount %s", payment.id, charge_amount)
        try:
            response = await self.client.pay_payment(payment.id, charge_amount)
        except AppError as exc:
            logger.error("Payment %s failed: %s", payment.id, exc)
            raise

        return PaidPaymentStatus(
            payment=payment.model_copy(update={"amount": charge_amount}),
            status=response.status,
        )

    async def execute_all(self, allocations: Iterable[Allocation]) -> list[PaidPaymentStatus]:
        """Charge allocations one after another, in allocation order.

        Stops at the first failure; later allocations are never charged.
        """
        results: list[PaidPaymentStatus] = []
        for allocation in allocations:
            results.append(await self.execute(allocation.payment, allocation.charge_amount))
        return results
