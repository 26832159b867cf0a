"""Normalize raw Productboard API payloads into flat host records."""

from typing import Any

import structlog

from productboard_connector.models import EntityRecord, HealthRecord, RelationshipRecord
from productboard_connector.utils import build_entity_url, sanitize_html

logger = structlog.get_logger()


def _mapping(value: Any) -> dict[str, Any]:
    """Return value if it is a dict, else an empty dict."""
    return value if isinstance(value, dict) else {}


def _text(value: Any) -> str:
    return value if value else ""


def unwrap_data(payload: Any) -> Any:
    """Return the ``data`` member of a v2 response envelope, or the payload itself."""
    if isinstance(payload, dict) and payload.get("data") is not None:
        return payload["data"]
    return payload


def as_list(data: Any) -> list[Any]:
    """Normalize response data to a list; a single object becomes a one-item list."""
    if isinstance(data, list):
        return data
    if isinstance(data, dict) and data:
        return [data]
    return []


def _format_health(health: dict[str, Any]) -> HealthRecord:
    created_by = _mapping(health.get("createdBy"))
    return HealthRecord(
        id=health.get("id"),
        status=health.get("status"),
        previousStatus=_text(health.get("previousStatus")),
        mode=health.get("mode"),
        comment=_text(health.get("comment")),
        commentPlainText=sanitize_html(health.get("comment")),
        lastUpdatedAt=health.get("lastUpdatedAt"),
        updatedByEmail=_text(created_by.get("email")),
        updatedById=_text(created_by.get("id")),
    )


def build_entity_record(raw: Any) -> EntityRecord:
    """Convert a raw API entity into an EntityRecord.

    Every nested lookup tolerates missing or malformed intermediate objects.
    """
    entity = _mapping(raw)
    fields = _mapping(entity.get("fields"))
    status = _mapping(fields.get("status"))
    owner = _mapping(fields.get("owner"))
    timeframe = _mapping(fields.get("timeframe"))
    health = fields.get("health")

    entity_id = entity.get("id")
    entity_type = entity.get("type")

    return EntityRecord(
        id=entity_id,
        type=entity_type,
        name=_text(fields.get("name")),
        description=_text(fields.get("description")),
        descriptionPlainText=sanitize_html(fields.get("description")),
        url=build_entity_url(entity_type, entity_id),
        status=_text(status.get("name")),
        statusId=_text(status.get("id")),
        archived=bool(fields.get("archived") or False),
        ownerEmail=_text(owner.get("email")),
        ownerId=_text(owner.get("id")),
        startDate=_text(timeframe.get("startDate")),
        endDate=_text(timeframe.get("endDate")),
        createdAt=entity.get("createdAt"),
        updatedAt=entity.get("updatedAt"),
        health=_format_health(health) if isinstance(health, dict) and health else None,
    )


def format_entity(raw: Any) -> dict[str, Any]:
    """Format a raw API entity into the flat host payload."""
    record = build_entity_record(raw)
    logger.debug("Formatted entity", entity_id=record.id, has_health=record.health is not None)
    return record.to_dict()


def format_health_update(raw: Any) -> dict[str, Any] | None:
    """Format an entity for the health update trigger.

    The health ID becomes the record ID so the host can deduplicate on it;
    the entity ID moves to ``entityId``.

    Returns:
        The trigger record, or None when the entity carries no health value
    """
    record = build_entity_record(raw)
    if record.health is None or not record.health.id:
        return None

    payload = record.to_dict()
    payload["entityId"] = record.id
    payload["id"] = record.health.id
    return payload


def format_relationship(source_entity_id: str, raw: Any) -> dict[str, Any]:
    """Format one relationship returned by ``/v2/entities/{id}/relationships``."""
    relationship = _mapping(raw)
    target = _mapping(relationship.get("target"))
    links = _mapping(target.get("links"))
    target_id = target.get("id")

    record = RelationshipRecord(
        id=relationship.get("id") or f"{source_entity_id}_{target_id or 'unknown'}",
        sourceEntityId=source_entity_id,
        relationshipType=_text(relationship.get("type")),
        relatedEntityId=_text(target_id),
        relatedEntityType=_text(target.get("type")),
        relatedEntityUrl=_text(links.get("self")),
    )
    return record.to_dict()


def flatten_record(record: dict[str, Any], separator: str = "__") -> dict[str, Any]:
    """Flatten nested dicts into ``parent__child`` keys.

    A nested ``health`` of None still produces every ``health__*`` key, set
    to None, so flattened records always share one key set.
    """
    flat: dict[str, Any] = {}
    for key, value in record.items():
        if key == "health" and value is None:
            for health_key in HealthRecord().to_dict():
                flat[f"{key}{separator}{health_key}"] = None
        elif isinstance(value, dict):
            for child_key, child_value in flatten_record(value, separator).items():
                flat[f"{key}{separator}{child_key}"] = child_value
        else:
            flat[key] = value
    return flat
