from settlement.schemas.invoice import (
    CreditNote,
    Invoice,
    PaidPayment,
    Payment,
    PendingPayment,
    ReceivedInvoice,
    invoice_list_adapter,
)
from settlement.schemas.organization import OrganizationSettings
from settlement.schemas.payment import PaidPaymentStatus, PaymentResponse, SettlementPlanEntry

__all__ = [
    "CreditNote",
    "Invoice",
    "OrganizationSettings",
    "PaidPayment",
    "PaidPaymentStatus",
    "Payment",
    "PaymentResponse",
    "PendingPayment",
    "ReceivedInvoice",
    "SettlementPlanEntry",
    "invoice_list_adapter",
]
