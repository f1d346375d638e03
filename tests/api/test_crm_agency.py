"""Tests for Agency API (sub-account listing and health)."""

import pytest

from rocket_crm import CRMConfig

from tests.conftest import (
    MOCK_LOCATION,
    SAMPLE_AGENCY_KEY,
    SAMPLE_COMPANY_ID,
    SAMPLE_LOCATION_ID,
    SAMPLE_PIT_KEY,
    Recorder,
    json_response,
)


@pytest.fixture
def sample_locations_page():
    return {
        "locations": [
            MOCK_LOCATION,
            {"id": "loc_second", "name": "Second Business", "timezone": "America/Los_Angeles"},
        ],
        "count": 2,
    }


class TestListLocations:
    @pytest.mark.asyncio
    async def test_first_page_omits_zero_skip(self, make_client, sample_locations_page):
        recorder = Recorder(json_response(200, sample_locations_page))
        async with make_client(recorder) as crm:
            result = await crm.agency.list_locations(limit=100, skip=0)

        assert result.ok
        assert len(result.data["locations"]) == 2
        request = recorder.last
        assert request.url.path == "/locations/search"
        assert request.url.params["limit"] == "100"
        assert "skip" not in request.url.params
        assert "search" not in request.url.params
        assert request.headers["Authorization"] == f"Bearer {SAMPLE_AGENCY_KEY}"

    @pytest.mark.asyncio
    async def test_later_page_sends_skip_and_company(self, make_client):
        recorder = Recorder(json_response(200, {"locations": []}))
        async with make_client(recorder) as crm:
            await crm.agency.list_locations(
                limit=50, skip=100, search="Main", company_id=SAMPLE_COMPANY_ID,
            )

        params = recorder.last.url.params
        assert params["skip"] == "100"
        assert params["limit"] == "50"
        assert params["search"] == "Main"
        assert params["companyId"] == SAMPLE_COMPANY_ID

    @pytest.mark.asyncio
    async def test_without_agency_key(self, make_client):
        recorder = Recorder(json_response(200, {"locations": []}))
        async with make_client(recorder, CRMConfig(pit_key=SAMPLE_PIT_KEY)) as crm:
            result = await crm.agency.list_locations(limit=100)

        assert result.error == "Agency API key not configured"
        assert result.status == 0
        assert recorder.requests == []

    @pytest.mark.asyncio
    async def test_passes_through_crm_error(self, make_client):
        recorder = Recorder(json_response(403, {"message": "Forbidden resource"}))
        async with make_client(recorder) as crm:
            result = await crm.agency.list_locations(limit=100)

        assert result.error == "Forbidden resource"
        assert result.status == 403


@pytest.mark.asyncio
async def test_get_location(make_client):
    recorder = Recorder(json_response(200, {"location": MOCK_LOCATION}))
    async with make_client(recorder) as crm:
        result = await crm.agency.get_location(SAMPLE_LOCATION_ID)

    assert result.data["location"]["name"] == "Test Business"
    assert recorder.last.url.path == f"/locations/{SAMPLE_LOCATION_ID}"


class TestCheckHealth:
    @pytest.mark.asyncio
    async def test_online(self, make_client, sample_locations_page):
        recorder = Recorder(json_response(200, sample_locations_page))
        async with make_client(recorder) as crm:
            health = await crm.agency.check_health()

        assert health == {"online": True, "error": None, "status": 200, "hasLocations": True}
        assert recorder.last.url.params["limit"] == "1"

    @pytest.mark.asyncio
    async def test_falls_back_to_pit_key(self, make_client):
        recorder = Recorder(json_response(200, {"locations": []}))
        async with make_client(recorder, CRMConfig(pit_key=SAMPLE_PIT_KEY)) as crm:
            health = await crm.agency.check_health()

        assert health["online"] is True
        assert recorder.last.headers["Authorization"] == f"Bearer {SAMPLE_PIT_KEY}"

    @pytest.mark.asyncio
    async def test_rejected_key(self, make_client):
        recorder = Recorder(json_response(401, {"message": "Invalid API key"}))
        async with make_client(recorder) as crm:
            health = await crm.agency.check_health()

        assert health["online"] is False
        assert health["status"] == 401
        assert health["error"] == "Invalid API key"
        assert health["hasLocations"] is False

    @pytest.mark.asyncio
    async def test_no_keys(self, make_client):
        recorder = Recorder(json_response(200, {}))
        async with make_client(recorder, CRMConfig()) as crm:
            health = await crm.agency.check_health()

        assert health == {"online": False, "error": "No CRM API key configured"}
        assert recorder.requests == []
