"""New Health Update polling trigger."""

from datetime import datetime
from typing import Any

import structlog

from productboard_connector.client import ProductboardClient
from productboard_connector.fields import ENTITY_OUTPUT_FIELDS, InputField, OutputField
from productboard_connector.formatter import as_list, format_health_update
from productboard_connector.models import EntityType
from productboard_connector.operation import Operation, OperationKind

logger = structlog.get_logger()

TRIGGER_ENTITY_TYPE_CHOICES = {
    EntityType.FEATURE.value: "Feature",
    EntityType.INITIATIVE.value: "Initiative",
    EntityType.OBJECTIVE.value: "Objective",
    EntityType.KEY_RESULT.value: "Key Result",
}


def _updated_at(record: dict[str, Any]) -> float:
    """Sort key: health update time as a timestamp, missing values sort last."""
    value = (record.get("health") or {}).get("lastUpdatedAt")
    if not value:
        return float("-inf")
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00")).timestamp()
    except ValueError:
        return float("-inf")


class HealthUpdates(Operation):
    """Poll for entities carrying a health value, newest update first.

    Each record's ID is the health ID, which changes whenever the health is
    replaced, so the host's deduplication fires once per update.
    """

    key = "healthUpdates"
    noun = "Health Update"
    kind = OperationKind.TRIGGER
    label = "New Health Update"
    description = (
        "Triggers when a health status is updated on a Productboard entity "
        "(feature, initiative, objective, or key result)."
    )

    input_fields = [
        InputField(
            "entityType",
            "Entity Type",
            choices=TRIGGER_ENTITY_TYPE_CHOICES,
            help_text="Filter by entity type. Leave empty to get health updates from all entity types.",
        ),
    ]
    output_fields = [OutputField("entityId", "Entity ID"), *ENTITY_OUTPUT_FIELDS]

    sample = {
        "id": "health_abc123",
        "entityId": "ent_feature456",
        "type": "feature",
        "name": "User Authentication",
        "description": "<p>Implement secure user authentication flow</p>",
        "descriptionPlainText": "Implement secure user authentication flow",
        "url": "https://zapier.productboard.com/feature-board/165206/detail/feature/ent_feature456",
        "status": "In Progress",
        "statusId": "status_123",
        "archived": False,
        "ownerEmail": "pm@example.com",
        "ownerId": "member_456",
        "startDate": "2025-01-01",
        "endDate": "2025-03-31",
        "createdAt": "2025-01-01T00:00:00Z",
        "updatedAt": "2025-12-13T12:00:00Z",
        "health": {
            "id": "health_abc123",
            "status": "onTrack",
            "previousStatus": "atRisk",
            "mode": "manual",
            "comment": "<p>Development is back on schedule.</p>",
            "commentPlainText": "Development is back on schedule.",
            "lastUpdatedAt": "2025-12-13T12:00:00Z",
            "updatedByEmail": "pm@example.com",
            "updatedById": "member_789",
        },
    }

    def perform(self, client: ProductboardClient, input_data: dict[str, Any]) -> list[dict[str, Any]]:
        entity_type = str(input_data.get("entityType") or "").strip()
        params = {"type": entity_type} if entity_type else {}

        logger.info("Polling health updates", entity_type=entity_type or None)
        response = client.list_entities(params)
        entities = response.get("data") if isinstance(response, dict) else None

        records = []
        for entity in as_list(entities):
            record = format_health_update(entity)
            if record is not None:
                records.append(record)

        records.sort(key=_updated_at, reverse=True)
        logger.info("Polled health updates", count=len(records))
        return records
