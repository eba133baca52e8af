"""HTTP client for the remote billing API.

Maps every transport, status and payload failure onto the settlement error
taxonomy so callers only ever see ``AppError`` subclasses.
"""

import logging
from decimal import Decimal
from typing import Any

import httpx
from pydantic import ValidationError

from settlement.core.config import settings
from settlement.core.errors import HttpError, NetworkError, NotFoundError, ParseError
from settlement.schemas.invoice import Invoice, invoice_list_adapter
from settlement.schemas.organization import OrganizationSettings
from settlement.schemas.payment import PaymentResponse

logger = logging.getLogger(__name__)

PENDING_INVOICES_PATH = "/invoices/pending"


def organization_settings_path(organization_id: str) -> str:
    return f"/organization/{organization_id}/settings"


def pay_path(payment_id: str) -> str:
    return f"/payment/{payment_id}/pay"


class BillingClient:
    """Async client for the invoices, organization settings and payment endpoints."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self.base_url = (base_url or settings.BILLING_API_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.BILLING_API_TIMEOUT_SECONDS
        # An injected client must carry its own base URL and is closed by its owner.
        self._owns_client = client is None
        self._client = client if client is not None else httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    async def __aenter__(self) -> "BillingClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        """Issue one request and return the decoded JSON body."""
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("Request %s %s failed: %s", method, path, exc)
            raise NetworkError(str(exc) or exc.__class__.__name__) from exc

        if not response.is_success:
            logger.warning(
                "Request %s %s returned %d %s",
                method,
                path,
                response.status_code,
                response.reason_phrase,
            )
            raise HttpError(response.status_code, response.reason_phrase)

        try:
            return response.json()
        except ValueError as exc:
            raise ParseError(f"Response of {method} {path} is not valid JSON") from exc

    async def fetch_pending_invoices(self) -> list[Invoice]:
        data = await self._request("GET", PENDING_INVOICES_PATH)
        try:
            return invoice_list_adapter.validate_python(data)
        except ValidationError as exc:
            raise ParseError(f"Not a valid invoice list: {exc.error_count()} error(s)") from exc

    async def fetch_organization_settings(self, organization_id: str) -> OrganizationSettings:
        try:
            data = await self._request("GET", organization_settings_path(organization_id))
        except HttpError as exc:
            if exc.status == 404:
                raise NotFoundError(
                    f"Settings for organization {organization_id} not found"
                ) from exc
            raise
        try:
            return OrganizationSettings.model_validate(data)
        except ValidationError as exc:
            raise ParseError(
                f"Not valid organization settings for {organization_id}"
            ) from exc

    async def pay_payment(self, payment_id: str, amount: Decimal) -> PaymentResponse:
        """Charge ``amount`` against a payment. Called exactly once, never retried."""
        data = await self._request(
            "POST",
            pay_path(payment_id),
            json={"amount": float(amount)},
            headers={"Content-Type": "application/json"},
        )
        try:
            return PaymentResponse.model_validate(data)
        except ValidationError as exc:
            raise ParseError(f"Not a valid payment status for payment {payment_id}") from exc
