"""Get Entity search: look up a single entity by ID."""

from typing import Any

import structlog

from productboard_connector.client import ProductboardClient
from productboard_connector.errors import NotFoundError
from productboard_connector.fields import ENTITY_OUTPUT_FIELDS, InputField
from productboard_connector.formatter import format_entity, unwrap_data
from productboard_connector.operation import Operation, OperationKind

logger = structlog.get_logger()


class GetEntity(Operation):
    """Find a specific entity by ID, including its health status."""

    key = "getEntity"
    noun = "Entity"
    kind = OperationKind.SEARCH
    label = "Get Entity"
    description = "Finds a specific entity by ID, including its health status."

    input_fields = [
        InputField(
            "entityId",
            "Entity ID",
            required=True,
            help_text="The unique ID of the entity to retrieve (e.g., from a previous Productboard step).",
        ),
    ]
    output_fields = ENTITY_OUTPUT_FIELDS

    sample = {
        "id": "ent_feature123",
        "type": "feature",
        "name": "Dark Mode Support",
        "description": "<p>Implement dark mode theme across the application</p>",
        "descriptionPlainText": "Implement dark mode theme across the application",
        "url": "https://zapier.productboard.com/feature-board/165206/detail/feature/ent_feature123",
        "status": "Planned",
        "statusId": "status_456",
        "archived": False,
        "ownerEmail": "pm@example.com",
        "ownerId": "member_456",
        "startDate": "2025-02-01",
        "endDate": "2025-04-30",
        "createdAt": "2025-06-01T00:00:00Z",
        "updatedAt": "2025-12-13T15:30:00Z",
        "health": {
            "id": "health_update_456",
            "status": "onTrack",
            "previousStatus": "atRisk",
            "mode": "manual",
            "comment": "<p>Health is looking good!</p>",
            "commentPlainText": "Health is looking good!",
            "lastUpdatedAt": "2025-12-13T12:00:00Z",
            "updatedByEmail": "pm@example.com",
            "updatedById": "member_789",
        },
    }

    def perform(self, client: ProductboardClient, input_data: dict[str, Any]) -> list[dict[str, Any]]:
        """Fetch one entity. A missing ID or a 404 yields no results."""
        entity_id = str(input_data.get("entityId") or "").strip()
        if not entity_id:
            logger.debug("No entity ID given, returning no results")
            return []

        logger.info("Reading entity", entity_id=entity_id)
        try:
            response = client.get_entity(entity_id)
        except NotFoundError:
            logger.info("Entity not found", entity_id=entity_id)
            return []

        return [format_entity(unwrap_data(response))]
