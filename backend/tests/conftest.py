"""Shared test fixtures for all test modules."""

import asyncio
from decimal import Decimal

import pytest

from settlement.core.errors import AppError, NotFoundError
from settlement.models.currency import Currency
from settlement.models.payment import PaymentResultStatus
from settlement.schemas.invoice import (
    CreditNote,
    Invoice,
    PaidPayment,
    PendingPayment,
    ReceivedInvoice,
)
from settlement.schemas.organization import OrganizationSettings
from settlement.schemas.payment import PaymentResponse

DEFAULT_ORG_ID = "org_1"


def make_received_invoice(
    invoice_id: str,
    payments: list[PendingPayment | PaidPayment],
    currency: Currency = Currency.USD,
    organization_id: str = DEFAULT_ORG_ID,
    amount: str | None = None,
) -> ReceivedInvoice:
    total = Decimal(amount) if amount is not None else sum((p.amount for p in payments), Decimal(0))
    return ReceivedInvoice(
        id=invoice_id,
        amount=total,
        currency=currency,
        organization_id=organization_id,
        payments=payments,
    )


def make_credit_note(
    credit_note_id: str,
    reference: str,
    amount: str,
    currency: Currency = Currency.USD,
    organization_id: str = DEFAULT_ORG_ID,
) -> CreditNote:
    return CreditNote(
        id=credit_note_id,
        amount=Decimal(amount),
        currency=currency,
        organization_id=organization_id,
        reference=reference,
    )


def pending(payment_id: str, amount: str) -> PendingPayment:
    return PendingPayment(id=payment_id, amount=Decimal(amount))


def paid(payment_id: str, amount: str) -> PaidPayment:
    return PaidPayment(id=payment_id, amount=Decimal(amount))


class FakeBillingClient:
    """In-memory stand-in for BillingClient that records every call.

    ``payment_errors`` maps a payment id to the error its pay call raises.
    ``settings_errors`` does the same for organization ids. ``pay_delays``
    adds a sleep before a pay call completes.
    """

    def __init__(
        self,
        invoices: list[Invoice] | None = None,
        organization_settings: list[OrganizationSettings] | None = None,
        payment_errors: dict[str, AppError] | None = None,
        settings_errors: dict[str, AppError] | None = None,
        pay_delays: dict[str, float] | None = None,
        payment_statuses: dict[str, PaymentResultStatus] | None = None,
    ):
        self.invoices = invoices or []
        self.organization_settings = {s.organization_id: s for s in organization_settings or []}
        self.payment_errors = payment_errors or {}
        self.settings_errors = settings_errors or {}
        self.pay_delays = pay_delays or {}
        self.payment_statuses = payment_statuses or {}
        self.pay_calls: list[tuple[str, Decimal]] = []
        self.completed_payments: list[str] = []
        self.settings_calls: list[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def __aenter__(self) -> "FakeBillingClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        return None

    async def fetch_pending_invoices(self) -> list[Invoice]:
        return list(self.invoices)

    async def fetch_organization_settings(self, organization_id: str) -> OrganizationSettings:
        self.settings_calls.append(organization_id)
        if organization_id in self.settings_errors:
            raise self.settings_errors[organization_id]
        org_settings = self.organization_settings.get(organization_id)
        if org_settings is None:
            raise NotFoundError(f"Settings for organization {organization_id} not found")
        return org_settings

    async def pay_payment(self, payment_id: str, amount: Decimal) -> PaymentResponse:
        self.pay_calls.append((payment_id, amount))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.pay_delays.get(payment_id, 0))
            if payment_id in self.payment_errors:
                raise self.payment_errors[payment_id]
        finally:
            self.in_flight -= 1
        self.completed_payments.append(payment_id)
        return PaymentResponse(
            status=self.payment_statuses.get(payment_id, PaymentResultStatus.PAID)
        )


@pytest.fixture
def usd_settings():
    """Settings of the default organization, settling in USD."""
    return OrganizationSettings(organization_id=DEFAULT_ORG_ID, currency=Currency.USD)


@pytest.fixture
def end_to_end_invoices():
    """One received invoice with two pending payments and one credit note against it."""
    return [
        make_received_invoice("inv1", [pending("p1", "100"), pending("p2", "50")]),
        make_credit_note("cn1", reference="inv1", amount="80"),
    ]
