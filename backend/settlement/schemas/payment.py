"""Payment call schemas."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from settlement.models.payment import PaymentResultStatus
from settlement.schemas.invoice import PendingPayment


class PaymentResponse(BaseModel):
    """Reply of the payment endpoint."""

    status: PaymentResultStatus


class PaidPaymentStatus(BaseModel):
    """Outcome of charging one payment.

    ``payment`` carries the amount actually charged, in the organization's
    settlement currency.
    """

    model_config = ConfigDict(frozen=True)

    payment: PendingPayment
    status: PaymentResultStatus


class SettlementPlanEntry(BaseModel):
    """One planned charge of a settlement preview.

    Every amount is expressed in ``currency``, the organization's settlement
    currency.
    """

    organization_id: str
    invoice_id: str
    payment_id: str
    currency: str
    original_amount: Decimal
    charge_amount: Decimal
    remaining_budget: Decimal
