"""Tests for the operation registry and host metadata."""

import pytest

from productboard_connector.formatter import flatten_record
from productboard_connector.operation import OperationKind
from productboard_connector.operations import GetEntity
from productboard_connector.registry import Integration, build_integration


@pytest.fixture
def integration() -> Integration:
    return build_integration()


def test_registered_operations(integration: Integration) -> None:
    """Test every operation is registered under its kind."""
    assert set(integration.triggers) == {"healthUpdates"}
    assert set(integration.searches) == {"listEntities", "getEntity", "getEntityRelationships"}
    assert set(integration.creates) == {"createHealthUpdate", "createNoteRelationship"}


def test_get_operation(integration: Integration) -> None:
    """Test looking up operations by key."""
    assert integration.get_operation("getEntity").noun == "Entity"
    with pytest.raises(KeyError, match="Unknown operation"):
        integration.get_operation("deleteEntity")


def test_duplicate_registration(integration: Integration) -> None:
    """Test registering the same key twice fails."""
    with pytest.raises(ValueError, match="Duplicate search key"):
        integration.register(GetEntity())


def test_samples_cover_output_fields(integration: Integration) -> None:
    """Test every sample provides every declared output key."""
    for operation in integration.operations():
        sample_keys = set(flatten_record(operation.sample))
        output_keys = {output_field.key for output_field in operation.output_fields}
        assert output_keys <= sample_keys, operation.key


def test_entity_search_metadata(integration: Integration) -> None:
    """Test the entity searches expose choices and health outputs."""
    list_entities = integration.get_operation("listEntities").describe()
    fields = {field["key"]: field for field in list_entities["operation"]["inputFields"]}

    assert {"feature", "initiative", "objective", "keyResult", "releaseGroup"} <= set(fields["entityType"]["choices"])
    assert set(fields["healthStatus"]["choices"]) == {"notSet", "onTrack", "atRisk", "offTrack"}
    assert set(fields["archived"]["choices"]) == {"false", "true", "all"}
    assert fields["archived"]["default"] == "false"
    assert fields["startDateFrom"]["type"] == "datetime"

    get_entity = integration.get_operation("getEntity").describe()
    output_keys = [field["key"] for field in get_entity["operation"]["outputFields"]]
    assert {"health__status", "health__mode", "health__comment"} <= set(output_keys)
    assert get_entity["operation"]["inputFields"][0]["required"] is True


def test_create_health_update_metadata(integration: Integration) -> None:
    """Test required inputs and choices of the health action."""
    operation = integration.get_operation("createHealthUpdate")
    fields = {field.key: field for field in operation.input_fields}

    assert operation.kind == OperationKind.CREATE
    assert fields["entityId"].required is True
    assert fields["status"].required is True
    assert set(fields["mode"].choices) == {"manual", "calculated"}
    assert fields["comment"].type == "text"


def test_describe_integration(integration: Integration) -> None:
    """Test the full host description."""
    description = integration.describe()

    assert description["authentication"]["fields"][0]["key"] == "apiToken"
    assert description["triggers"]["healthUpdates"]["kind"] == "trigger"
    assert description["searches"]["getEntity"]["display"]["label"] == "Get Entity"
    assert description["creates"]["createNoteRelationship"]["noun"] == "Note Relationship"
