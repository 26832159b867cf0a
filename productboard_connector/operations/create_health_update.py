"""Create/Update Health Status action."""

from typing import Any

import structlog

from productboard_connector.client import ProductboardClient
from productboard_connector.fields import ENTITY_OUTPUT_FIELDS, InputField
from productboard_connector.formatter import format_entity, unwrap_data
from productboard_connector.models import HEALTH_MODE_CHOICES, HEALTH_STATUS_CHOICES, HealthMode, HealthStatus
from productboard_connector.operation import Operation, OperationKind

logger = structlog.get_logger()


def as_rich_text(comment: Any) -> str:
    """Wrap plain text in a paragraph; HTML is passed through."""
    text = str(comment).strip()
    return text if text.startswith("<") else f"<p>{text}</p>"


def build_health_payload(
    status: str,
    mode: str | None = None,
    comment: Any = None,
    created_by_id: str | None = None,
) -> dict[str, Any]:
    """Build the PATCH body that replaces an entity's health value.

    Args:
        status: Health status (notSet, onTrack, atRisk, offTrack)
        mode: Health mode, defaults to manual
        comment: Plain text or HTML comment
        created_by_id: Member ID recorded as the author

    Returns:
        Request body in the ``{"data": {"fields": {"health": ...}}}`` shape
    """
    valid_statuses = [member.value for member in HealthStatus]
    if status not in valid_statuses:
        raise ValueError(f"Invalid health status: '{status}'. Expected one of: {valid_statuses}")

    mode = mode or HealthMode.MANUAL.value
    valid_modes = [member.value for member in HealthMode]
    if mode not in valid_modes:
        raise ValueError(f"Invalid health mode: '{mode}'. Expected one of: {valid_modes}")

    health: dict[str, Any] = {"status": status, "mode": mode}
    if comment is not None and str(comment).strip():
        health["comment"] = as_rich_text(comment)
    if created_by_id:
        health["createdBy"] = {"id": created_by_id}

    return {"data": {"fields": {"health": health}}}


class CreateHealthUpdate(Operation):
    """Set the health status of an entity, then return the refreshed entity."""

    key = "createHealthUpdate"
    noun = "Health Update"
    kind = OperationKind.CREATE
    label = "Create/Update Health Status"
    description = "Updates the health status for a Productboard entity (feature, initiative, objective, etc.)."

    input_fields = [
        InputField(
            "entityId",
            "Entity ID",
            required=True,
            help_text="The ID of the entity to update (feature, initiative, objective, etc.).",
        ),
        InputField(
            "status",
            "Health Status",
            required=True,
            choices=HEALTH_STATUS_CHOICES,
            help_text="The new health status for the entity.",
        ),
        InputField(
            "comment",
            "Comment",
            "text",
            help_text="Optional comment explaining the health status. Can be plain text or HTML.",
        ),
        InputField(
            "mode",
            "Mode",
            choices=HEALTH_MODE_CHOICES,
            default=HealthMode.MANUAL.value,
            help_text='Health mode - typically "manual" when set via API.',
        ),
        InputField(
            "createdById",
            "Created By (Member ID)",
            help_text="Optional: The UUID of the Productboard member creating this update.",
        ),
    ]
    output_fields = ENTITY_OUTPUT_FIELDS

    sample = {
        "id": "ent_feature123",
        "type": "feature",
        "name": "User Authentication",
        "description": "<p>Implement secure user authentication flow</p>",
        "descriptionPlainText": "Implement secure user authentication flow",
        "url": "https://zapier.productboard.com/feature-board/165206/detail/feature/ent_feature123",
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
            "id": "health_abc789",
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

    def perform(self, client: ProductboardClient, input_data: dict[str, Any]) -> dict[str, Any]:
        """PATCH the health field, then GET the entity.

        The PATCH response is minimal, so the full entity is re-fetched after
        the update has been applied.
        """
        entity_id = str(input_data.get("entityId") or "").strip()
        status = str(input_data.get("status") or "").strip()
        if not entity_id:
            raise ValueError("entityId is required to update health")
        if not status:
            raise ValueError("status is required to update health")

        body = build_health_payload(
            status=status,
            mode=input_data.get("mode"),
            comment=input_data.get("comment"),
            created_by_id=input_data.get("createdById"),
        )

        logger.info("Updating entity health", entity_id=entity_id, status=status)
        client.update_entity(entity_id, body)

        response = client.get_entity(entity_id)
        record = format_entity(unwrap_data(response))
        logger.info("Entity health updated", entity_id=entity_id, status=status)
        return record
