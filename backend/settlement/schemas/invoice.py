"""Invoice and payment schemas as served by the billing API."""

from decimal import Decimal
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from settlement.models.currency import Currency


class PendingPayment(BaseModel):
    """A payment installment still waiting to be charged."""

    model_config = ConfigDict(frozen=True)

    id: str
    amount: Decimal = Field(ge=0)
    status: Literal["pending"] = "pending"


class PaidPayment(BaseModel):
    """A payment installment that was already charged."""

    model_config = ConfigDict(frozen=True)

    id: str
    amount: Decimal = Field(ge=0)
    status: Literal["paid"] = "paid"


Payment = Annotated[PendingPayment | PaidPayment, Field(discriminator="status")]


class ReceivedInvoice(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    amount: Decimal = Field(ge=0)
    currency: Currency
    organization_id: str
    type: Literal["received"] = "received"
    payments: list[Payment] = Field(default_factory=list)


class CreditNote(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    amount: Decimal = Field(ge=0)
    currency: Currency
    organization_id: str
    type: Literal["credit_note"] = "credit_note"
    reference: str


Invoice = Annotated[ReceivedInvoice | CreditNote, Field(discriminator="type")]

invoice_list_adapter: TypeAdapter[list[Invoice]] = TypeAdapter(list[Invoice])
