"""Async test fixtures for console tests using SQLite."""

from __future__ import annotations

import json

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from onmcp.database import get_db
from onmcp.models import Base
from onmcp.services import mcp_svc
from rocket_crm import CRMClient, CRMConfig


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest_asyncio.fixture
async def engine():
    eng = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine):
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(engine):
    """HTTPX async test client against the console app."""
    from onmcp.app import app

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()


def _location(n: int, **extra) -> dict:
    return {
        "id": f"loc_{n:04d}",
        "name": f"Location {n:04d}",
        "city": "Austin",
        "state": "TX",
        "postalCode": "78701",
        **extra,
    }


class FakeCRM:
    """Location listing served from a list, paged by skip/limit like the real API."""

    def __init__(self, locations: list[dict], fail_on_call: int | None = None,
                 fail_status: int = 401, ignore_skip: bool = False):
        self.locations = locations
        self.fail_on_call = fail_on_call
        self.fail_status = fail_status
        self.ignore_skip = ignore_skip
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_on_call == len(self.requests):
            return httpx.Response(self.fail_status, json={"message": "Invalid API key"})

        limit = int(request.url.params.get("limit", "100"))
        skip = 0 if self.ignore_skip else int(request.url.params.get("skip", "0"))
        page = self.locations[skip:skip + limit]
        return httpx.Response(
            200,
            content=json.dumps({"locations": page, "count": len(page)}).encode(),
            headers={"Content-Type": "application/json"},
        )

    def client(self, **config) -> CRMClient:
        cfg = CRMConfig(**{"agency_api_key": "agency-test-key", **config})
        return CRMClient(cfg, transport=httpx.MockTransport(self))


@pytest.fixture
def make_location():
    """Factory for raw CRM location payloads."""
    return _location


@pytest.fixture
def fake_crm():
    """Factory for FakeCRM handlers."""
    return FakeCRM


@pytest.fixture
def upstream(monkeypatch):
    """Route mcp_svc's outbound HTTP to a handler set by the test."""
    state = {"handler": None, "requests": []}

    def handler(request: httpx.Request) -> httpx.Response:
        state["requests"].append(request)
        return state["handler"](request)

    def fake_http_client(timeout: float) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler), timeout=timeout)

    monkeypatch.setattr(mcp_svc, "http_client", fake_http_client)
    return state
