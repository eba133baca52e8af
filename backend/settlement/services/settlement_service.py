"""Settlement orchestration.

A run fetches pending invoices, groups them per organization, turns each
organization's credit notes into discount budgets and charges every pending
payment of its received invoices. The run is fail-fast: the first error
anywhere cancels the remaining work and is raised to the caller, and no
partial result is returned.
"""

import asyncio
import logging
from collections import defaultdict
from collections.abc import Coroutine, Iterable, Sequence
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, TypeVar

from settlement.core.config import settings
from settlement.core.errors import AppError
from settlement.schemas.invoice import CreditNote, Invoice, ReceivedInvoice
from settlement.schemas.organization import OrganizationSettings
from settlement.schemas.payment import PaidPaymentStatus, SettlementPlanEntry
from settlement.services.billing_client import BillingClient
from settlement.services.credit_aggregation import AmountByReference, aggregate_credits
from settlement.services.discount_allocation import Allocation, allocate
from settlement.services.organization_settings import (
    OrganizationSettingsProvider,
    RemoteOrganizationSettingsProvider,
)
from settlement.services.payment_executor import PaymentExecutor

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class InvoicePlan:
    invoice: ReceivedInvoice
    allocations: list[Allocation]


@dataclass(frozen=True)
class OrganizationPlan:
    settings: OrganizationSettings
    invoices: list[InvoicePlan]


def group_by_organization(invoices: Iterable[Invoice]) -> dict[str, list[Invoice]]:
    groups: dict[str, list[Invoice]] = defaultdict(list)
    for invoice in invoices:
        groups[invoice.organization_id].append(invoice)
    return dict(groups)


def partition_invoices(
    invoices: Iterable[Invoice],
) -> tuple[list[ReceivedInvoice], list[CreditNote]]:
    """Split invoices into received invoices and credit notes, keeping order."""
    received: list[ReceivedInvoice] = []
    credit_notes: list[CreditNote] = []
    for invoice in invoices:
        if isinstance(invoice, ReceivedInvoice):
            received.append(invoice)
        else:
            credit_notes.append(invoice)
    return received, credit_notes


def _first_error(group: BaseExceptionGroup) -> BaseException:
    error: BaseException = group
    while isinstance(error, BaseExceptionGroup):
        error = error.exceptions[0]
    return error


async def run_fail_fast(coros: Sequence[Coroutine[Any, Any, T]]) -> list[T]:
    """Run coroutines concurrently and return their results in input order.

    The first failure cancels the still-running siblings and is re-raised
    on its own, unwrapped from the task group's exception group.
    """
    try:
        async with asyncio.TaskGroup() as tg:
            tasks = [tg.create_task(coro) for coro in coros]
    except BaseExceptionGroup as group:
        raise _first_error(group) from None
    return [task.result() for task in tasks]


class SettlementService:
    """Runs settlements over batches of invoices."""

    def __init__(
        self,
        client: BillingClient,
        settings_provider: OrganizationSettingsProvider | None = None,
        organization_concurrency: int | None = None,
        invoice_concurrency: int | None = None,
    ):
        self.client = client
        self.settings_provider = settings_provider or RemoteOrganizationSettingsProvider(client)
        self.executor = PaymentExecutor(client)
        self.organization_concurrency = (
            settings.ORGANIZATION_CONCURRENCY
            if organization_concurrency is None
            else organization_concurrency
        )
        self.invoice_concurrency = (
            settings.INVOICE_CONCURRENCY if invoice_concurrency is None else invoice_concurrency
        )
        if self.organization_concurrency < 1 or self.invoice_concurrency < 1:
            raise ValueError("Concurrency bounds must be at least 1")

    async def settle_pending(self) -> list[PaidPaymentStatus]:
        """Fetch the pending invoices and settle them."""
        logger.info("Fetching pending invoices")
        invoices = await self.client.fetch_pending_invoices()
        return await self.settle(invoices)

    async def settle(self, invoices: Iterable[Invoice]) -> list[PaidPaymentStatus]:
        """Settle every pending payment of ``invoices``.

        Results are ordered by organization id, then invoice order, then
        allocation order.

        Raises:
            AppError: The first error met anywhere in the run.
        """
        groups = group_by_organization(invoices)
        logger.info("Settling %d organization(s)", len(groups))

        organization_slots = asyncio.Semaphore(self.organization_concurrency)
        invoice_slots = asyncio.Semaphore(self.invoice_concurrency)

        async def settle_organization(
            organization_id: str, org_invoices: list[Invoice]
        ) -> list[PaidPaymentStatus]:
            async with organization_slots:
                return await self._settle_organization(
                    organization_id, org_invoices, invoice_slots
                )

        try:
            per_organization = await run_fail_fast(
                [settle_organization(org_id, groups[org_id]) for org_id in sorted(groups)]
            )
        except AppError as exc:
            logger.error("Settlement run failed: %s", exc)
            raise

        results = [status for statuses in per_organization for status in statuses]
        logger.info("Settlement run completed with %d payment(s)", len(results))
        return results

    async def preview_pending(self) -> list[SettlementPlanEntry]:
        """Fetch the pending invoices and plan their settlement without paying."""
        invoices = await self.client.fetch_pending_invoices()
        return await self.preview(invoices)

    async def preview(self, invoices: Iterable[Invoice]) -> list[SettlementPlanEntry]:
        """Compute every charge a settlement would issue, without paying anything."""
        groups = group_by_organization(invoices)
        organization_slots = asyncio.Semaphore(self.organization_concurrency)

        async def plan(organization_id: str, org_invoices: list[Invoice]) -> OrganizationPlan:
            async with organization_slots:
                return await self.plan_organization(organization_id, org_invoices)

        plans = await run_fail_fast([plan(org_id, groups[org_id]) for org_id in sorted(groups)])
        return [
            SettlementPlanEntry(
                organization_id=org_plan.settings.organization_id,
                invoice_id=invoice_plan.invoice.id,
                payment_id=allocation.payment.id,
                currency=org_plan.settings.currency.value,
                original_amount=allocation.converted_amount,
                charge_amount=allocation.charge_amount,
                remaining_budget=allocation.remaining_budget,
            )
            for org_plan in plans
            for invoice_plan in org_plan.invoices
            for allocation in invoice_plan.allocations
        ]

    async def plan_organization(
        self, organization_id: str, invoices: Iterable[Invoice]
    ) -> OrganizationPlan:
        """Fetch an organization's settings and allocate credits across its invoices."""
        org_settings = await self.settings_provider.get_settings(organization_id)
        received, credit_notes = partition_invoices(invoices)
        budgets = aggregate_credits(credit_notes, org_settings.currency)
        logger.info(
            "Organization %s: %d invoice(s), %d credit reference(s), currency %s",
            organization_id,
            len(received),
            len(budgets),
            org_settings.currency.value,
        )

        unmatched = set(budgets) - {invoice.id for invoice in received}
        if unmatched:
            logger.debug(
                "Organization %s: credit references without a pending invoice: %s",
                organization_id,
                ", ".join(sorted(unmatched)),
            )

        return OrganizationPlan(
            settings=org_settings,
            invoices=[
                InvoicePlan(invoice, self._allocate_invoice(invoice, budgets, org_settings))
                for invoice in received
            ],
        )

    @staticmethod
    def _allocate_invoice(
        invoice: ReceivedInvoice,
        budgets: AmountByReference,
        org_settings: OrganizationSettings,
    ) -> list[Allocation]:
        budget = budgets.get(invoice.id, Decimal(0))
        return allocate(invoice.payments, budget, invoice.currency, org_settings.currency)

    async def _settle_organization(
        self,
        organization_id: str,
        invoices: list[Invoice],
        invoice_slots: asyncio.Semaphore,
    ) -> list[PaidPaymentStatus]:
        org_plan = await self.plan_organization(organization_id, invoices)

        async def settle_invoice(invoice_plan: InvoicePlan) -> list[PaidPaymentStatus]:
            async with invoice_slots:
                return await self.executor.execute_all(invoice_plan.allocations)

        per_invoice = await run_fail_fast(
            [settle_invoice(invoice_plan) for invoice_plan in org_plan.invoices]
        )
        return [status for statuses in per_invoice for status in statuses]
