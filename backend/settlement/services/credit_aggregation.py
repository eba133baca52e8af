from collections import defaultdict
from collections.abc import Iterable
from decimal import Decimal

from settlement.models.currency import Currency, convert
from settlement.schemas.invoice import CreditNote

AmountByReference = dict[str, Decimal]


def aggregate_credits(
    credit_notes: Iterable[CreditNote], target_currency: Currency
) -> AmountByReference:
    """Sum credit notes per reference, converted into ``target_currency``.

    References are not checked against existing invoices.
    """
    totals: dict[str, Decimal] = defaultdict(lambda: Decimal(0))
    for credit_note in credit_notes:
        totals[credit_note.reference] += convert(
            credit_note.amount, credit_note.currency, target_currency
        )
    return dict(totals)
