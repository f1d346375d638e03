"""Console models - re-exports all models and Base.metadata."""

from .base import Base, UUIDMixin, TimestampMixin
from .location import CRMLocation
from .agency_config import AgencyConfig, AGENCY_CONFIG_ID, AGENCY_STATUSES
from .sync_log import CRMSyncLog
from .mcp_server import MCPServer, MCPExecutionLog

__all__ = [
    "Base",
    "UUIDMixin",
    "TimestampMixin",
    "CRMLocation",
    "AgencyConfig",
    "AGENCY_CONFIG_ID",
    "AGENCY_STATUSES",
    "CRMSyncLog",
    "MCPServer",
    "MCPExecutionLog",
]
