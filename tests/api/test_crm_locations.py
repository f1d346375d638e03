"""Tests for location-scoped reads."""

import pytest

from tests.conftest import (
    SAMPLE_LOCATION_ID,
    SAMPLE_LOCATION_TOKEN,
    Recorder,
    json_response,
)


@pytest.mark.asyncio
async def test_get_contacts_uses_location_token(make_client):
    recorder = Recorder(json_response(200, {"contacts": [{"id": "c1"}], "meta": {"total": 1}}))
    async with make_client(recorder) as crm:
        result = await crm.locations.get_contacts(
            SAMPLE_LOCATION_ID, SAMPLE_LOCATION_TOKEN, params={"limit": "20"},
        )

    assert result.data["contacts"][0]["id"] == "c1"
    request = recorder.last
    assert request.url.path == "/contacts/"
    assert request.url.params["locationId"] == SAMPLE_LOCATION_ID
    assert request.url.params["limit"] == "20"
    assert request.headers["Authorization"] == f"Bearer {SAMPLE_LOCATION_TOKEN}"


@pytest.mark.asyncio
async def test_location_calls_never_fall_back_to_agency_key(make_client):
    recorder = Recorder(json_response(200, {}))
    async with make_client(recorder) as crm:
        result = await crm.locations.get_calendars(SAMPLE_LOCATION_ID, "")

    assert result.error == "Location token required"
    assert result.status == 0
    assert recorder.requests == []


@pytest.mark.asyncio
async def test_get_opportunities_with_pipeline(make_client):
    recorder = Recorder(json_response(200, {"opportunities": []}))
    async with make_client(recorder) as crm:
        await crm.locations.get_opportunities(SAMPLE_LOCATION_ID, SAMPLE_LOCATION_TOKEN, pipeline_id="p1")

    params = recorder.last.url.params
    assert recorder.last.url.path == "/opportunities/search"
    assert params["location_id"] == SAMPLE_LOCATION_ID
    assert params["pipeline_id"] == "p1"


@pytest.mark.asyncio
@pytest.mark.parametrize("method, path", [
    ("get_conversations", "/conversations/search"),
    ("get_calendars", "/calendars/"),
    ("get_pipelines", "/opportunities/pipelines"),
    ("get_users", "/users/"),
])
async def test_location_endpoints(make_client, method, path):
    recorder = Recorder(json_response(200, {}))
    async with make_client(recorder) as crm:
        result = await getattr(crm.locations, method)(SAMPLE_LOCATION_ID, SAMPLE_LOCATION_TOKEN)

    assert result.ok
    assert recorder.last.url.path == path
    assert recorder.last.url.params["locationId"] == SAMPLE_LOCATION_ID
