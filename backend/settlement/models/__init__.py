from settlement.models.currency import USD_RATES, Currency, convert
from settlement.models.payment import InvoiceType, PaymentResultStatus, PaymentStatus

__all__ = [
    "Currency",
    "InvoiceType",
    "PaymentResultStatus",
    "PaymentStatus",
    "USD_RATES",
    "convert",
]
