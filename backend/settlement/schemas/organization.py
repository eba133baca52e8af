from pydantic import BaseModel, ConfigDict

from settlement.models.currency import Currency


class OrganizationSettings(BaseModel):
    """Currency every settlement amount of an organization is paid in."""

    model_config = ConfigDict(frozen=True)

    organization_id: str
    currency: Currency
