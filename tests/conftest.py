"""Shared test fixtures for the Rocket CRM client tests."""

import json

import httpx
import pytest

from rocket_crm import CRMClient, CRMConfig

# Sample IDs used across tests
SAMPLE_LOCATION_ID = "loc_test123"
SAMPLE_COMPANY_ID = "comp_test456"
SAMPLE_AGENCY_KEY = "agency_key_abc"
SAMPLE_PIT_KEY = "pit-1234567890abcdef"
SAMPLE_LOCATION_TOKEN = "loc_token_xyz"
SAMPLE_CLIENT_ID = "client_id_123"
SAMPLE_CLIENT_SECRET = "client_secret_456"


# ============================================================================
# Mock Response Data
# ============================================================================

MOCK_LOCATION = {
    "id": SAMPLE_LOCATION_ID,
    "name": "Test Business",
    "email": "test@example.com",
    "phone": "+15551234567",
    "address": "123 Main St",
    "city": "New York",
    "state": "NY",
    "postalCode": "10001",
    "country": "US",
    "website": "https://example.com",
    "timezone": "America/New_York",
    "companyId": SAMPLE_COMPANY_ID,
}

MOCK_TOKENS = {
    "access_token": "access_abc",
    "refresh_token": "refresh_def",
    "expires_in": 86399,
    "token_type": "Bearer",
    "locationId": SAMPLE_LOCATION_ID,
}


def json_response(status: int, payload) -> httpx.Response:
    return httpx.Response(status, content=json.dumps(payload).encode(),
                          headers={"Content-Type": "application/json"})


class Recorder:
    """MockTransport handler that records requests and replays canned responses."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(response, Exception):
            raise response
        return response

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def config():
    return CRMConfig(
        agency_api_key=SAMPLE_AGENCY_KEY,
        pit_key=SAMPLE_PIT_KEY,
        client_id=SAMPLE_CLIENT_ID,
        client_secret=SAMPLE_CLIENT_SECRET,
    )


@pytest.fixture
def make_client(config):
    """Build a CRMClient whose HTTP traffic goes to a Recorder."""

    def _make(recorder: Recorder, cfg: CRMConfig | None = None) -> CRMClient:
        return CRMClient(cfg or config, transport=httpx.MockTransport(recorder))

    return _make
