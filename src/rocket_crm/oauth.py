"""OAuth 2.0 helpers for Rocket CRM Marketplace apps.

Handles the Authorization Code flow:
1. Generate authorization URL
2. Exchange code for access + refresh tokens
3. Refresh tokens when expired

Token calls POST form-encoded grants to ``<api_base>/oauth/token`` and return
the same CRMResponse triple as every other client call.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from urllib.parse import urlencode

import httpx

from .client import CRMResponse

if TYPE_CHECKING:
    from .client import CRMClient

logger = logging.getLogger(__name__)

MARKETPLACE_AUTH_URL = "https://marketplace.gohighlevel.com/oauth/chooselocation"
TOKEN_ENDPOINT = "/oauth/token"


class OAuthAPI:
    """Marketplace OAuth for a configured client ID/secret pair.

    Usage:
        url = crm.oauth.authorization_url("https://app.example.com/callback")
        # user consents, provider redirects back with ?code=...
        tokens = await crm.oauth.exchange_code(code, "https://app.example.com/callback")
        fresh = await crm.oauth.refresh_token(tokens.data["refresh_token"])
    """

    def __init__(self, client: "CRMClient"):
        self._client = client

    @property
    def _configured(self) -> bool:
        config = self._client.config
        return bool(config.client_id and config.client_secret)

    def authorization_url(self, redirect_uri: str, scopes: list[str] | None = None) -> str | None:
        """Consent URL for the marketplace, or None without a client ID."""
        client_id = self._client.config.client_id
        if not client_id:
            return None

        params = {
            "response_type": "code",
            "redirect_uri": redirect_uri,
            "client_id": client_id,
            "scope": " ".join(scopes or []),
        }
        return f"{MARKETPLACE_AUTH_URL}?{urlencode(params)}"

    async def exchange_code(self, code: str, redirect_uri: str) -> CRMResponse:
        """Trade an authorization code for access + refresh tokens."""
        return await self._grant(
            {
                "grant_type": "authorization_code",
                "code": code,
                "redirect_uri": redirect_uri,
            },
            "OAuth exchange failed",
        )

    async def refresh_token(self, refresh_token: str) -> CRMResponse:
        """Get a fresh access token from a refresh token."""
        return await self._grant(
            {"grant_type": "refresh_token", "refresh_token": refresh_token},
            "Token refresh failed",
        )

    async def _grant(self, fields: dict[str, str], failure_message: str) -> CRMResponse:
        if not self._configured:
            return CRMResponse.failure("OAuth credentials not configured")

        config = self._client.config
        form = {
            "client_id": config.client_id,
            "client_secret": config.client_secret,
            **fields,
        }
        try:
            response = await self._client.http.post(
                TOKEN_ENDPOINT,
                data=form,
                headers={"Content-Type": "application/x-www-form-urlencoded"},
            )
        except httpx.HTTPError as e:
            logger.warning("OAuth %s failed: %s", fields["grant_type"], e)
            return CRMResponse.failure(str(e) or failure_message)
        except Exception as e:
            logger.warning("OAuth %s could not be sent: %s", fields["grant_type"], e)
            return CRMResponse.failure(str(e) or failure_message)

        try:
            payload = response.json()
        except ValueError as e:
            if response.is_success:
                return CRMResponse.failure(f"Invalid JSON from token endpoint: {e}")
            payload = {}

        if not response.is_success:
            error = payload.get("error") if isinstance(payload, dict) else None
            return CRMResponse.failure(error or failure_message, response.status_code)

        return CRMResponse(data=payload, error=None, status=response.status_code)
