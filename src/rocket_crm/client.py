"""Rocket CRM API client - typed wrapper for the LeadConnector REST API.

Every call returns a ``CRMResponse`` triple instead of raising:

1. success            -> ``data`` set, ``error`` None, ``status`` 2xx
2. application error  -> ``data`` None, ``error`` from body, ``status`` >= 400
3. transport/config   -> ``data`` None, ``error`` set, ``status`` 0
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Literal, TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from .agency import AgencyAPI
    from .locations import LocationAPI
    from .oauth import OAuthAPI

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "https://services.leadconnectorhq.com"
DEFAULT_API_VERSION = "2021-07-28"

CRMScope = Literal["agency", "pit", "location", "oauth"]

# Scope -> CRMConfig attribute holding its credential. None means the caller
# supplies the token (per-location key or OAuth access token).
SCOPE_CREDENTIALS: dict[str, str | None] = {
    "agency": "agency_api_key",
    "pit": "pit_key",
    "location": None,
    "oauth": None,
}


@dataclass
class CRMConfig:
    """Credentials and endpoint settings, built once at process start."""

    agency_api_key: str = ""
    pit_key: str = ""
    client_id: str = ""
    client_secret: str = ""
    api_base: str = DEFAULT_API_BASE
    api_version: str = DEFAULT_API_VERSION
    timeout: float = 30.0

    @classmethod
    def from_env(cls) -> "CRMConfig":
        """Load config from CRM_* environment variables."""
        return cls(
            agency_api_key=os.environ.get("CRM_AGENCY_API_KEY", ""),
            pit_key=os.environ.get("CRM_PIT_KEY", ""),
            client_id=os.environ.get("CRM_CLIENT_ID", ""),
            client_secret=os.environ.get("CRM_CLIENT_SECRET", ""),
            api_base=os.environ.get("CRM_API_BASE") or DEFAULT_API_BASE,
            api_version=os.environ.get("CRM_API_VERSION") or DEFAULT_API_VERSION,
        )


@dataclass
class CRMResponse:
    """Normalized result of a CRM call."""

    data: Any = None
    error: str | None = None
    status: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None and 200 <= self.status < 300

    @property
    def unreachable(self) -> bool:
        """True when the request never got an HTTP answer (or never left)."""
        return self.status == 0

    @classmethod
    def failure(cls, error: str, status: int = 0) -> "CRMResponse":
        return cls(data=None, error=error, status=status)

    def to_dict(self) -> dict[str, Any]:
        return {"data": self.data, "error": self.error, "status": self.status}


def _error_message(payload: Any, response: httpx.Response) -> str:
    """Pick the most useful error string out of a rejected response."""
    if isinstance(payload, dict):
        for key in ("message", "error"):
            value = payload.get(key)
            if isinstance(value, list):
                value = "; ".join(str(v) for v in value if v)
            if isinstance(value, str) and value:
                return value
    return f"CRM API {response.status_code}: {response.reason_phrase}"


def parse_response(response: httpx.Response) -> CRMResponse:
    """Convert an httpx response into the CRMResponse triple."""
    try:
        payload = response.json() if response.content else {}
    except ValueError as e:
        if response.is_success:
            return CRMResponse.failure(f"Invalid JSON from CRM API: {e}")
        payload = None

    if not response.is_success:
        return CRMResponse.failure(_error_message(payload, response), response.status_code)

    return CRMResponse(data=payload, error=None, status=response.status_code)


class CRMClient:
    """Rocket CRM API client with domain-specific sub-APIs.

    Usage:
        async with CRMClient(CRMConfig.from_env()) as crm:
            page = await crm.agency.list_locations(limit=100)
            if page.ok:
                locations = page.data["locations"]
    """

    def __init__(self, config: CRMConfig, transport: httpx.AsyncBaseTransport | None = None):
        self.config = config
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

        # Domain APIs (initialized on enter)
        self._agency: AgencyAPI | None = None
        self._locations: LocationAPI | None = None
        self._oauth: OAuthAPI | None = None

    async def __aenter__(self) -> "CRMClient":
        self._client = httpx.AsyncClient(
            base_url=self.config.api_base,
            timeout=self.config.timeout,
            transport=self._transport,
            headers={
                "Version": self.config.api_version,
                "Accept": "application/json",
            },
        )

        from .agency import AgencyAPI
        from .locations import LocationAPI
        from .oauth import OAuthAPI

        self._agency = AgencyAPI(self)
        self._locations = LocationAPI(self)
        self._oauth = OAuthAPI(self)
        return self

    async def __aexit__(self, *args):
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def http(self) -> httpx.AsyncClient:
        if not self._client:
            raise RuntimeError("Client not initialized. Use 'async with' context.")
        return self._client

    @property
    def agency(self) -> "AgencyAPI":
        """Agency-level API (sub-account listing, health)."""
        if not self._agency:
            raise RuntimeError("Client not initialized. Use 'async with' context.")
        return self._agency

    @property
    def locations(self) -> "LocationAPI":
        """Location-scoped API (contacts, pipelines, ...)."""
        if not self._locations:
            raise RuntimeError("Client not initialized. Use 'async with' context.")
        return self._locations

    @property
    def oauth(self) -> "OAuthAPI":
        """Marketplace OAuth token endpoint."""
        if not self._oauth:
            raise RuntimeError("Client not initialized. Use 'async with' context.")
        return self._oauth

    def resolve_token(self, scope: CRMScope, token: str | None = None) -> str:
        """Return the credential for ``scope``.

        Agency and PIT scopes read the configured keys; location and OAuth
        scopes use the caller-supplied token.
        """
        if scope not in SCOPE_CREDENTIALS:
            raise ValueError(f"Unknown CRM scope: {scope}")
        attr = SCOPE_CREDENTIALS[scope]
        if attr is None:
            return token or ""
        return getattr(self.config, attr) or ""

    async def request(
        self,
        endpoint: str,
        token: str,
        method: str = "GET",
        body: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> CRMResponse:
        """Issue one authenticated request and normalize the result."""
        headers = {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        }
        try:
            response = await self.http.request(
                method,
                endpoint,
                params=params or None,
                json=body,
                headers=headers,
            )
        except httpx.HTTPError as e:
            logger.warning("CRM %s %s failed: %s", method, endpoint, e)
            return CRMResponse.failure(str(e) or "CRM API request failed")
        except Exception as e:
            # Request never left: bad header value, malformed URL
            logger.warning("CRM %s %s could not be sent: %s", method, endpoint, e)
            return CRMResponse.failure(str(e) or "CRM API request failed")

        return parse_response(response)

    async def call(
        self,
        endpoint: str,
        scope: CRMScope,
        token: str | None = None,
        method: str = "GET",
        body: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> CRMResponse:
        """Generic call: any endpoint under any scope. A supplied token wins."""
        resolved = token or self.resolve_token(scope)
        if not resolved:
            return CRMResponse.failure(f"No API key for scope: {scope}")
        return await self.request(endpoint, resolved, method=method, body=body, params=params)
