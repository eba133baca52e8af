"""Waterfall allocation of a credit budget across an invoice's pending payments."""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from settlement.models.currency import Currency, convert
from settlement.schemas.invoice import Payment, PendingPayment

ZERO = Decimal(0)


@dataclass(frozen=True)
class Allocation:
    """Charge decided for one pending payment.

    ``converted_amount``, ``charge_amount`` and ``remaining_budget`` are all
    expressed in the settlement currency.
    """

    payment: PendingPayment
    converted_amount: Decimal
    charge_amount: Decimal
    remaining_budget: Decimal


def allocate(
    payments: Iterable[Payment],
    initial_budget: Decimal,
    invoice_currency: Currency,
    target_currency: Currency,
) -> list[Allocation]:
    """Spread ``initial_budget`` over the pending payments, smallest first.

    Each payment consumes its full converted amount from the budget, even the
    part that exceeded what was left to discount.
    """
    pending = sorted(
        (p for p in payments if isinstance(p, PendingPayment)),
        key=lambda p: p.amount,
    )

    allocations: list[Allocation] = []
    remaining = initial_budget
    for payment in pending:
        converted = convert(payment.amount, invoice_currency, target_currency)
        charge = max(converted - remaining, ZERO)
        remaining = max(remaining - converted, ZERO)
        allocations.append(
            Allocation(
                payment=payment,
                converted_amount=converted,
                charge_amount=charge,
                remaining_budget=remaining,
            )
        )
    return allocations
