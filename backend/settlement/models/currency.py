"""Settlement currencies and fixed-rate conversion through a USD pivot."""

from decimal import Decimal
from enum import Enum


class Currency(str, Enum):
    """Currencies an invoice or an organization can be settled in."""

    USD = "USD"
    CLP = "CLP"
    MXN = "MXN"


# Units of each currency per 1 USD
USD_RATES: dict[Currency, Decimal] = {
    Currency.USD: Decimal("1"),
    Currency.CLP: Decimal("900"),
    Currency.MXN: Decimal("15"),
}


def convert(amount: Decimal, from_currency: Currency, to_currency: Currency) -> Decimal:
    """Convert an amount between two currencies.

    No rounding is applied. Converting into the same currency returns the
    amount untouched.
    """
    if from_currency == to_currency:
        return amount
    usd_amount = amount / USD_RATES[from_currency]
    return usd_amount * USD_RATES[to_currency]
