"""Payment and invoice status enums."""

from enum import Enum


class PaymentStatus(str, Enum):
    """Status of a payment installment on a received invoice."""

    PENDING = "pending"
    PAID = "paid"


class PaymentResultStatus(str, Enum):
    """Status the payment endpoint reports after a pay call."""

    PAID = "paid"
    WRONG_AMOUNT = "wrong_amount"


class InvoiceType(str, Enum):
    RECEIVED = "received"
    CREDIT_NOTE = "credit_note"
