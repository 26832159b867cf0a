"""Translate user filter inputs into Productboard entity query shapes.

The entities API accepts the same logical filter in several shapes:

* ``QUERY_PARAMS``: flat, dot-separated query parameters for ``GET /v2/entities``
* ``SEARCH_BODY``: ``{"type": ..., "filter": {...}}`` for ``POST /v2/entities/search``
* ``SEARCH_ENVELOPE``: the same body wrapped in ``{"data": ...}``

All three are built from a single structured filter object.
"""

from datetime import date, datetime
from enum import Enum
from typing import Any

import structlog

from productboard_connector.models import ArchivedFilter

logger = structlog.get_logger()


class FilterShape(str, Enum):
    """Output shape of the filter builder."""

    QUERY_PARAMS = "params"
    SEARCH_BODY = "bare"
    SEARCH_ENVELOPE = "envelope"


class SearchMode(str, Enum):
    """Which entities endpoint a listing should use."""

    LIST = "list"
    SEARCH = "search"


# (input key, filter object key, member name, query parameter)
MULTI_VALUE_FILTERS = (
    ("ownerIds", "owner", "ids", "owner.id"),
    ("statusNames", "status", "names", "status.name"),
    ("healthStatus", "health", "statuses", "health.status"),
)

HIERARCHY_FILTERS = (
    ("parentId", "parent", "ids", "parent.id"),
    ("productId", "product", "ids", "product.id"),
    ("componentId", "component", "ids", "component.id"),
    ("initiativeId", "initiative", "ids", "initiative.id"),
    ("objectiveId", "objective", "ids", "objective.id"),
    ("releaseId", "release", "ids", "release.id"),
)

# (input key, timeframe field, bound)
DATE_FILTERS = (
    ("startDateFrom", "startDate", "gte"),
    ("startDateTo", "startDate", "lte"),
    ("endDateFrom", "endDate", "gte"),
    ("endDateTo", "endDate", "lte"),
)


def split_values(value: Any) -> list[str]:
    """Split a comma-separated string or a list into trimmed, non-empty values.

    Args:
        value: A list/tuple of values, a comma-separated string, a scalar, or None

    Returns:
        Trimmed values in input order
    """
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        items = value
    else:
        items = str(value).split(",")
    return [str(item).strip() for item in items if item is not None and str(item).strip()]


def parse_archived(value: Any) -> bool | None:
    """Parse the archived filter input.

    Returns:
        False for active only, True for archived only, None for no constraint
    """
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        return value

    normalized = str(value).strip().lower()
    if normalized == ArchivedFilter.ALL.value or normalized == "":
        return None
    if normalized == ArchivedFilter.ARCHIVED.value:
        return True
    if normalized == ArchivedFilter.ACTIVE.value:
        return False
    raise ValueError(f"Invalid archived filter: '{value}'. Expected one of: false, true, all")


def _date_value(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    text = str(value).strip()
    return text or None


def build_filter_object(inputs: dict[str, Any]) -> dict[str, Any]:
    """Build the structured search filter from user inputs.

    Empty values are omitted entirely rather than sent as empty constraints.
    """
    filter_object: dict[str, Any] = {}

    for input_key, filter_key, member, _ in MULTI_VALUE_FILTERS + HIERARCHY_FILTERS:
        values = split_values(inputs.get(input_key))
        if values:
            filter_object[filter_key] = {member: values}

    archived = parse_archived(inputs.get("archived"))
    if archived is not None:
        filter_object["archived"] = archived

    timeframe: dict[str, dict[str, str]] = {}
    for input_key, field_name, bound in DATE_FILTERS:
        value = _date_value(inputs.get(input_key))
        if value is not None:
            timeframe.setdefault(field_name, {})[bound] = value
    if timeframe:
        filter_object["timeframe"] = timeframe

    return filter_object


def _to_query_params(entity_type: str | None, filter_object: dict[str, Any]) -> dict[str, Any]:
    params: dict[str, Any] = {}
    if entity_type:
        params["type"] = entity_type

    for _, filter_key, member, param in MULTI_VALUE_FILTERS + HIERARCHY_FILTERS:
        if filter_key in filter_object:
            params[param] = ",".join(filter_object[filter_key][member])

    if "archived" in filter_object:
        params["archived"] = filter_object["archived"]

    for field_name, bounds in filter_object.get("timeframe", {}).items():
        for bound, value in bounds.items():
            params[f"timeframe.{field_name}.{bound}"] = value

    return params


def has_filter_values(inputs: dict[str, Any]) -> bool:
    """Check whether any optional filter input carries a value."""
    return bool(build_filter_object(inputs))


def select_search_mode(inputs: dict[str, Any]) -> SearchMode:
    """Pick plain listing or advanced search.

    Advanced search needs an entity type and at least one filter value.
    """
    entity_type = str(inputs.get("entityType") or "").strip()
    if entity_type and has_filter_values(inputs):
        return SearchMode.SEARCH
    return SearchMode.LIST


def build_filter(inputs: dict[str, Any], shape: FilterShape = FilterShape.SEARCH_BODY) -> dict[str, Any]:
    """Build an entities query in the requested shape.

    Args:
        inputs: User inputs keyed by host field key (entityType, ownerIds, ...)
        shape: Output shape

    Returns:
        Query parameters or a search request body
    """
    entity_type = str(inputs.get("entityType") or "").strip() or None
    filter_object = build_filter_object(inputs)
    logger.debug("Built entity filter", shape=shape.value, entity_type=entity_type, keys=list(filter_object))

    if shape == FilterShape.QUERY_PARAMS:
        return _to_query_params(entity_type, filter_object)

    body: dict[str, Any] = {}
    if entity_type:
        body["type"] = entity_type
    body["filter"] = filter_object

    if shape == FilterShape.SEARCH_ENVELOPE:
        return {"data": body}
    return body
