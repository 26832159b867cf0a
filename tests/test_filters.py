"""Tests for the entity filter builder."""

from datetime import date

import pytest

from productboard_connector.filters import (
    FilterShape,
    SearchMode,
    build_filter,
    build_filter_object,
    parse_archived,
    select_search_mode,
    split_values,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, []),
        ("", []),
        ("a", ["a"]),
        ("In Progress, Done", ["In Progress", "Done"]),
        (" a ,, b ,", ["a", "b"]),
        (["x ", " y", ""], ["x", "y"]),
        (("one",), ["one"]),
    ],
)
def test_split_values(value: object, expected: list[str]) -> None:
    """Test splitting comma-separated strings and lists."""
    assert split_values(value) == expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, None),
        ("", None),
        ("all", None),
        ("ALL", None),
        ("true", True),
        ("false", False),
        (True, True),
        (False, False),
    ],
)
def test_parse_archived(value: object, expected: bool | None) -> None:
    """Test the three archived states."""
    assert parse_archived(value) is expected


def test_parse_archived_invalid() -> None:
    """Test unknown archived values are rejected."""
    with pytest.raises(ValueError, match="Invalid archived filter"):
        parse_archived("sometimes")


def test_status_names_are_trimmed_in_order() -> None:
    """Test status names become a trimmed list."""
    body = build_filter({"statusNames": "In Progress, Done"})
    assert body["filter"]["status"]["names"] == ["In Progress", "Done"]


def test_archived_all_is_omitted() -> None:
    """Test the 'all' archived state sends no archived constraint."""
    body = build_filter({"archived": "all"})
    params = build_filter({"archived": "all"}, FilterShape.QUERY_PARAMS)

    assert "archived" not in body["filter"]
    assert "archived" not in params


def test_archived_true() -> None:
    """Test archived only yields boolean True."""
    assert build_filter({"archived": "true"})["filter"]["archived"] is True
    assert build_filter({"archived": "true"}, FilterShape.QUERY_PARAMS)["archived"] is True


def test_empty_values_are_omitted() -> None:
    """Test empty inputs produce no keys."""
    filter_object = build_filter_object(
        {"ownerIds": " , ", "statusNames": [], "parentId": "", "startDateFrom": None, "endDateTo": "  "}
    )
    assert filter_object == {}


def test_build_filter_object() -> None:
    """Test a full structured filter."""
    filter_object = build_filter_object(
        {
            "ownerIds": ["member_1", "member_2"],
            "statusNames": "In Progress",
            "healthStatus": "atRisk",
            "archived": "false",
            "parentId": " ent_parent ",
            "productId": "prod_1",
            "componentId": "comp_1",
            "initiativeId": "init_1",
            "objectiveId": "obj_1",
            "releaseId": "rel_1",
            "startDateFrom": "2025-01-01",
            "endDateTo": date(2025, 6, 30),
        }
    )

    assert filter_object == {
        "owner": {"ids": ["member_1", "member_2"]},
        "status": {"names": ["In Progress"]},
        "health": {"statuses": ["atRisk"]},
        "parent": {"ids": ["ent_parent"]},
        "product": {"ids": ["prod_1"]},
        "component": {"ids": ["comp_1"]},
        "initiative": {"ids": ["init_1"]},
        "objective": {"ids": ["obj_1"]},
        "release": {"ids": ["rel_1"]},
        "archived": False,
        "timeframe": {"startDate": {"gte": "2025-01-01"}, "endDate": {"lte": "2025-06-30"}},
    }


def test_date_bounds_are_independent() -> None:
    """Test each date bound is included only when given."""
    filter_object = build_filter_object({"startDateFrom": "2025-01-01", "startDateTo": "2025-02-01"})
    assert filter_object == {"timeframe": {"startDate": {"gte": "2025-01-01", "lte": "2025-02-01"}}}

    filter_object = build_filter_object({"endDateFrom": "2025-03-01"})
    assert filter_object == {"timeframe": {"endDate": {"gte": "2025-03-01"}}}


def test_query_params_shape() -> None:
    """Test the GET listing shape flattens with dot keys and comma joins."""
    params = build_filter(
        {
            "entityType": "feature",
            "ownerIds": "member_1, member_2",
            "statusNames": ["In Progress", "Done"],
            "healthStatus": "onTrack",
            "archived": "false",
            "parentId": "ent_parent",
            "startDateTo": "2025-02-01",
        },
        FilterShape.QUERY_PARAMS,
    )

    assert params == {
        "type": "feature",
        "owner.id": "member_1,member_2",
        "status.name": "In Progress,Done",
        "health.status": "onTrack",
        "parent.id": "ent_parent",
        "archived": False,
        "timeframe.startDate.lte": "2025-02-01",
    }


def test_search_body_shapes() -> None:
    """Test bare and enveloped search bodies carry the same filter."""
    inputs = {"entityType": "initiative", "ownerIds": "member_1"}

    bare = build_filter(inputs, FilterShape.SEARCH_BODY)
    envelope = build_filter(inputs, FilterShape.SEARCH_ENVELOPE)

    assert bare == {"type": "initiative", "filter": {"owner": {"ids": ["member_1"]}}}
    assert envelope == {"data": bare}


def test_query_params_without_type() -> None:
    """Test listing without inputs sends no parameters."""
    assert build_filter({}, FilterShape.QUERY_PARAMS) == {}


@pytest.mark.parametrize(
    ("inputs", "expected"),
    [
        ({}, SearchMode.LIST),
        ({"entityType": "feature"}, SearchMode.LIST),
        ({"ownerIds": "member_1"}, SearchMode.LIST),
        ({"entityType": "feature", "archived": "all"}, SearchMode.LIST),
        ({"entityType": "feature", "archived": "false"}, SearchMode.SEARCH),
        ({"entityType": "feature", "statusNames": "Done"}, SearchMode.SEARCH),
        ({"entityType": " ", "statusNames": "Done"}, SearchMode.LIST),
    ],
)
def test_select_search_mode(inputs: dict, expected: SearchMode) -> None:
    """Test search mode needs both a type and a filter value."""
    assert select_search_mode(inputs) == expected
