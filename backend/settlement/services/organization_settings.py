"""Organization settings providers.

Supplies the settlement currency of each organization, either from the
billing API or from a fixed in-memory table.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable

from settlement.core.errors import NotFoundError, ParseError
from settlement.schemas.organization import OrganizationSettings
from settlement.services.billing_client import BillingClient


class OrganizationSettingsProvider(ABC):
    """Abstract source of organization settings."""

    @abstractmethod
    async def get_settings(self, organization_id: str) -> OrganizationSettings:
        """Return the settings of an organization or raise ``AppError``."""
        pass  # pragma: no cover


class RemoteOrganizationSettingsProvider(OrganizationSettingsProvider):
    """Reads settings from the billing API."""

    def __init__(self, client: BillingClient):
        self.client = client

    async def get_settings(self, organization_id: str) -> OrganizationSettings:
        org_settings = await self.client.fetch_organization_settings(organization_id)
        if org_settings.organization_id != organization_id:
            raise ParseError(
                f"Settings returned for organization {org_settings.organization_id}, "
                f"expected {organization_id}"
            )
        return org_settings


class StaticOrganizationSettingsProvider(OrganizationSettingsProvider):
    """Serves settings from a fixed collection."""

    def __init__(self, organization_settings: Iterable[OrganizationSettings]):
        self._settings = {s.organization_id: s for s in organization_settings}

    async def get_settings(self, organization_id: str) -> OrganizationSettings:
        org_settings = self._settings.get(organization_id)
        if org_settings is None:
            raise NotFoundError(f"Settings for organization {organization_id} not found")
        return org_settings
