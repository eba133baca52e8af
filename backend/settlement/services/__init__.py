from settlement.services.billing_client import BillingClient
from settlement.services.credit_aggregation import AmountByReference, aggregate_credits
from settlement.services.discount_allocation import Allocation, allocate
from settlement.services.organization_settings import (
    OrganizationSettingsProvider,
    RemoteOrganizationSettingsProvider,
    StaticOrganizationSettingsProvider,
)
from settlement.services.payment_executor import PaymentExecutor
from settlement.services.settlement_service import SettlementService

__all__ = [
    "Allocation",
    "AmountByReference",
    "BillingClient",
    "OrganizationSettingsProvider",
    "PaymentExecutor",
    "RemoteOrganizationSettingsProvider",
    "SettlementService",
    "StaticOrganizationSettingsProvider",
    "aggregate_credits",
    "allocate",
]
