"""FastAPI application for the 0nMCP console."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from .config import settings
from .logging_config import configure_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.log_level)
    from .database import create_tables
    await create_tables()
    yield


app = FastAPI(title=settings.app_title, lifespan=lifespan)

# Import and register routers
from .routers import (  # noqa: E402
    composer, crm_agency, crm_locations, execute, health, mcp, stats,
)

app.include_router(crm_agency.router)
app.include_router(crm_locations.router)
app.include_router(execute.router)
app.include_router(health.router)
app.include_router(mcp.router)
app.include_router(stats.router)
app.include_router(composer.router)
