"""Console configuration via pydantic-settings."""

from __future__ import annotations

from pydantic_settings import BaseSettings

from rocket_crm import CRMConfig
from rocket_crm.client import DEFAULT_API_BASE, DEFAULT_API_VERSION


class ConsoleSettings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///onmcp.db"
    echo_sql: bool = False
    app_title: str = "0nMCP Console"
    log_level: str = "INFO"

    # Rocket CRM credentials (agency key, marketplace PIT, OAuth app)
    crm_agency_api_key: str = ""
    crm_pit_key: str = ""
    crm_client_id: str = ""
    crm_client_secret: str = ""
    crm_api_base: str = DEFAULT_API_BASE
    crm_api_version: str = DEFAULT_API_VERSION
    crm_timeout_seconds: float = 30.0

    # Location sync
    crm_sync_page_size: int = 100
    crm_sync_max_pages: int = 500
    crm_default_agency_name: str = "0nORK Agency"

    # MCP servers
    onmcp_url: str = "http://localhost:3001"
    rocket_plus_url: str = "https://rocketadd.com/api"
    mcp_health_timeout_seconds: float = 5.0
    onmcp_health_timeout_seconds: float = 3.0
    onmcp_execute_timeout_seconds: float = 30.0
    crm_execute_timeout_seconds: float = 15.0

    model_config = {"env_file": ".env", "extra": "ignore"}

    @property
    def crm_configured(self) -> bool:
        return bool(self.crm_agency_api_key or self.crm_pit_key)

    @property
    def mcp_endpoints(self) -> dict[str, str]:
        return {
            "0nmcp": self.onmcp_url,
            "rocket_plus": self.rocket_plus_url,
            "crm": self.crm_api_base,
        }

    def crm_config(self) -> CRMConfig:
        """Build the CRM client configuration from these settings."""
        return CRMConfig(
            agency_api_key=self.crm_agency_api_key,
            pit_key=self.crm_pit_key,
            client_id=self.crm_client_id,
            client_secret=self.crm_client_secret,
            api_base=self.crm_api_base,
            api_version=self.crm_api_version,
            timeout=self.crm_timeout_seconds,
        )


settings = ConsoleSettings()
