"""Shared fixtures for connector tests."""

import json
from typing import Any

import httpx
import pytest

from productboard_connector.client import ProductboardClient
from productboard_connector.filters import FilterShape


class FakeProductboard:
    """Records requests and answers them from queued responses."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.responses: list[httpx.Response] = []

    def queue(self, status_code: int = 200, json_body: Any = None, text: str | None = None) -> None:
        if text is not None:
            self.responses.append(httpx.Response(status_code, text=text))
        elif json_body is None:
            self.responses.append(httpx.Response(status_code))
        else:
            self.responses.append(httpx.Response(status_code, json=json_body))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.responses:
            raise AssertionError(f"Unexpected request: {request.method} {request.url}")
        return self.responses.pop(0)

    def json_body(self, index: int = -1) -> Any:
        return json.loads(self.requests[index].content)


@pytest.fixture
def fake_api() -> FakeProductboard:
    """Create a fake Productboard API."""
    return FakeProductboard()


@pytest.fixture
def client(fake_api: FakeProductboard) -> ProductboardClient:
    """Create a client whose transport is the fake API."""
    http_client = httpx.Client(transport=httpx.MockTransport(fake_api))
    return ProductboardClient(api_token="test_token", http_client=http_client)


@pytest.fixture
def bare_client(fake_api: FakeProductboard) -> ProductboardClient:
    """Create a client sending unwrapped search bodies."""
    http_client = httpx.Client(transport=httpx.MockTransport(fake_api))
    return ProductboardClient(api_token="test_token", http_client=http_client, search_shape=FilterShape.SEARCH_BODY)


@pytest.fixture
def raw_feature() -> dict:
    """Create a raw v2 feature entity with a health value."""
    return {
        "id": "ent_feature123",
        "type": "feature",
        "createdAt": "2025-01-01T00:00:00Z",
        "updatedAt": "2025-12-13T10:00:00Z",
        "fields": {
            "name": "Dark Mode Support",
            "description": "<p>Implement dark mode&nbsp;theme &amp; contrast</p>",
            "status": {"id": "status_456", "name": "Planned"},
            "owner": {"id": "member_456", "email": "pm@example.com"},
            "timeframe": {"startDate": "2025-02-01", "endDate": "2025-04-30"},
            "archived": False,
            "health": {
                "id": "health_456",
                "status": "onTrack",
                "previousStatus": "atRisk",
                "mode": "manual",
                "comment": "<p>Health is looking good!</p>",
                "lastUpdatedAt": "2025-12-13T12:00:00Z",
                "createdBy": {"id": "member_789", "email": "lead@example.com"},
            },
        },
    }
