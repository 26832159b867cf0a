"""Tests for the Get Entity search."""

import pytest

from productboard_connector.client import ProductboardClient
from productboard_connector.errors import ApiError, ForbiddenError
from productboard_connector.operations import GetEntity


def test_get_entity(client: ProductboardClient, fake_api, raw_feature: dict) -> None:
    """Test reading an entity wrapped in a data envelope."""
    fake_api.queue(json_body={"data": raw_feature})

    records = GetEntity().perform(client, {"entityId": "ent_feature123"})

    assert len(records) == 1
    assert records[0]["name"] == "Dark Mode Support"
    assert records[0]["health"]["commentPlainText"] == "Health is looking good!"
    assert fake_api.requests[0].url.path == "/v2/entities/ent_feature123"


def test_get_entity_unwrapped(client: ProductboardClient, fake_api, raw_feature: dict) -> None:
    """Test reading an entity returned without an envelope."""
    fake_api.queue(json_body=raw_feature)

    records = GetEntity().perform(client, {"entityId": "ent_feature123"})

    assert records[0]["id"] == "ent_feature123"


def test_get_entity_not_found(client: ProductboardClient, fake_api) -> None:
    """Test a 404 yields no results instead of an error."""
    fake_api.queue(status_code=404, json_body={})

    assert GetEntity().perform(client, {"entityId": "missing"}) == []


@pytest.mark.parametrize("entity_id", [None, "", "   "])
def test_get_entity_without_id(client: ProductboardClient, fake_api, entity_id: str | None) -> None:
    """Test that no request is sent without an ID."""
    assert GetEntity().perform(client, {"entityId": entity_id}) == []
    assert fake_api.requests == []


def test_get_entity_other_errors_propagate(client: ProductboardClient, fake_api) -> None:
    """Test errors other than 404 are surfaced."""
    fake_api.queue(status_code=403, json_body={})
    with pytest.raises(ForbiddenError):
        GetEntity().perform(client, {"entityId": "e1"})

    fake_api.queue(status_code=500, json_body={"detail": "boom"})
    with pytest.raises(ApiError, match="boom"):
        GetEntity().perform(client, {"entityId": "e1"})
