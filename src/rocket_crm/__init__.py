"""Rocket CRM API client module.

Usage:
    from rocket_crm import CRMClient, CRMConfig

    async with CRMClient(CRMConfig.from_env()) as crm:
        page = await crm.agency.list_locations(limit=100)
        if page.unreachable:
            ...  # network / config failure
        elif not page.ok:
            ...  # CRM rejected the request (page.status >= 400)
"""

from .client import CRMClient, CRMConfig, CRMResponse, CRMScope, SCOPE_CREDENTIALS
from .agency import AgencyAPI
from .locations import LocationAPI
from .oauth import OAuthAPI

__all__ = [
    "CRMClient",
    "CRMConfig",
    "CRMResponse",
    "CRMScope",
    "SCOPE_CREDENTIALS",
    "AgencyAPI",
    "LocationAPI",
    "OAuthAPI",
]
