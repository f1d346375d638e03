"""Application error types."""

from __future__ import annotations


class SyncError(Exception):
    """A sync run could not complete."""


class LocationSyncError(SyncError):
    """Location sync aborted (CRM error or pagination contract violation)."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class UnknownServerError(ValueError):
    """Raised for an MCP server key outside the registry."""
