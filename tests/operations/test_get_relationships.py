"""Tests for the Get Entity Relationships search."""

import pytest

from productboard_connector.client import ProductboardClient
from productboard_connector.errors import AuthenticationError
from productboard_connector.operations import GetEntityRelationships


def test_get_relationships(client: ProductboardClient, fake_api) -> None:
    """Test listing relationships."""
    fake_api.queue(
        json_body={
            "data": [
                {"type": "parent", "target": {"id": "init_1", "type": "initiative", "links": {"self": "https://x/init_1"}}},
                {"type": "link", "target": {"id": "feat_2", "type": "feature"}},
            ]
        }
    )

    records = GetEntityRelationships().perform(client, {"entityId": "feat_1"})

    assert fake_api.requests[0].url.path == "/v2/entities/feat_1/relationships"
    assert [record["id"] for record in records] == ["feat_1_init_1", "feat_1_feat_2"]
    assert records[0]["relationshipType"] == "parent"
    assert records[0]["relatedEntityType"] == "initiative"
    assert records[0]["relatedEntityUrl"] == "https://x/init_1"
    assert records[1]["relatedEntityUrl"] == ""
    assert all(record["sourceEntityId"] == "feat_1" for record in records)


def test_get_relationships_single_object(client: ProductboardClient, fake_api) -> None:
    """Test a single relationship object is treated as a one-item list."""
    fake_api.queue(json_body={"data": {"type": "child", "target": {"id": "sub_1", "type": "subfeature"}}})

    records = GetEntityRelationships().perform(client, {"entityId": "feat_1"})

    assert len(records) == 1
    assert records[0]["relationshipType"] == "child"


def test_get_relationships_empty(client: ProductboardClient, fake_api) -> None:
    """Test an empty relationship list."""
    fake_api.queue(json_body={"data": []})
    assert GetEntityRelationships().perform(client, {"entityId": "feat_1"}) == []


def test_get_relationships_not_found(client: ProductboardClient, fake_api) -> None:
    """Test a 404 yields no results."""
    fake_api.queue(status_code=404, json_body={})
    assert GetEntityRelationships().perform(client, {"entityId": "missing"}) == []


def test_get_relationships_without_id(client: ProductboardClient, fake_api) -> None:
    """Test that no request is sent without an ID."""
    assert GetEntityRelationships().perform(client, {}) == []
    assert fake_api.requests == []


def test_get_relationships_auth_error(client: ProductboardClient, fake_api) -> None:
    """Test authentication errors propagate."""
    fake_api.queue(status_code=401, json_body={})
    with pytest.raises(AuthenticationError):
        GetEntityRelationships().perform(client, {"entityId": "feat_1"})
