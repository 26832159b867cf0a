"""Find Entities search: plain listing or advanced filtered search."""

from typing import Any

import structlog

from productboard_connector.client import ProductboardClient
from productboard_connector.fields import ENTITY_OUTPUT_FIELDS, InputField
from productboard_connector.filters import FilterShape, SearchMode, build_filter, select_search_mode
from productboard_connector.formatter import as_list, format_entity
from productboard_connector.models import ARCHIVED_CHOICES, ENTITY_TYPE_CHOICES, HEALTH_STATUS_CHOICES
from productboard_connector.operation import Operation, OperationKind

logger = structlog.get_logger()


class ListEntities(Operation):
    """Search entities with optional type, ownership, status, hierarchy, and date filters."""

    key = "listEntities"
    noun = "Entity"
    kind = OperationKind.SEARCH
    label = "Find Entities"
    description = "Searches entities in Productboard with advanced filtering (features, initiatives, objectives, etc.)."

    input_fields = [
        InputField(
            "entityType",
            "Entity Type",
            choices=ENTITY_TYPE_CHOICES,
            help_text=(
                "Filter by entity type. Required for advanced filtering. "
                "Leave empty to list all entities without filters."
            ),
        ),
        InputField(
            "ownerIds",
            "Owner IDs",
            help_text='Filter by owner(s). Enter comma-separated member IDs (e.g., "member_123,member_456").',
        ),
        InputField(
            "statusNames",
            "Status Names",
            help_text=(
                "Filter by status name(s). Enter comma-separated status names exactly as they appear "
                'in Productboard (e.g., "In Progress,Done").'
            ),
        ),
        InputField(
            "healthStatus",
            "Health Status",
            choices=HEALTH_STATUS_CHOICES,
            help_text="Filter by health status.",
        ),
        InputField(
            "archived",
            "Archived",
            choices=ARCHIVED_CHOICES,
            default="false",
            help_text="Filter by archived status. Defaults to active entities only.",
        ),
        InputField(
            "parentId",
            "Parent Entity ID",
            help_text="Filter by parent entity ID. Useful for finding child entities.",
        ),
        InputField("productId", "Product ID", help_text="Filter entities belonging to a specific product."),
        InputField("componentId", "Component ID", help_text="Filter features by component."),
        InputField("initiativeId", "Initiative ID", help_text="Filter entities linked to a specific initiative."),
        InputField("objectiveId", "Objective ID", help_text="Filter entities linked to a specific objective."),
        InputField("releaseId", "Release ID", help_text="Filter entities assigned to a specific release."),
        InputField(
            "startDateFrom",
            "Start Date (From)",
            "datetime",
            help_text="Filter entities with start date on or after this date.",
        ),
        InputField(
            "startDateTo",
            "Start Date (To)",
            "datetime",
            help_text="Filter entities with start date on or before this date.",
        ),
        InputField(
            "endDateFrom",
            "End Date (From)",
            "datetime",
            help_text="Filter entities with end date on or after this date.",
        ),
        InputField(
            "endDateTo",
            "End Date (To)",
            "datetime",
            help_text="Filter entities with end date on or before this date.",
        ),
    ]
    output_fields = ENTITY_OUTPUT_FIELDS

    sample = {
        "id": "ent_abc123",
        "type": "feature",
        "name": "User Authentication",
        "description": "<p>Implement secure user authentication flow</p>",
        "descriptionPlainText": "Implement secure user authentication flow",
        "url": "https://zapier.productboard.com/feature-board/165206/detail/feature/ent_abc123",
        "status": "In Progress",
        "statusId": "status_123",
        "archived": False,
        "ownerEmail": "pm@example.com",
        "ownerId": "member_456",
        "startDate": "2025-01-01",
        "endDate": "2025-03-31",
        "createdAt": "2025-01-01T00:00:00Z",
        "updatedAt": "2025-12-13T10:00:00Z",
        "health": {
            "id": "health_xyz789",
            "status": "onTrack",
            "previousStatus": "atRisk",
            "mode": "manual",
            "comment": "<p>On track for Q1 delivery.</p>",
            "commentPlainText": "On track for Q1 delivery.",
            "lastUpdatedAt": "2025-12-13T12:00:00Z",
            "updatedByEmail": "pm@example.com",
            "updatedById": "member_789",
        },
    }

    def perform(self, client: ProductboardClient, input_data: dict[str, Any]) -> list[dict[str, Any]]:
        """List entities, switching to the search endpoint when filters apply."""
        mode = select_search_mode(input_data)
        logger.info("Listing entities", mode=mode.value, entity_type=input_data.get("entityType"))

        if mode == SearchMode.SEARCH:
            body = build_filter(input_data, client.search_shape)
            response = client.search_entities(body)
        else:
            params = build_filter(input_data, FilterShape.QUERY_PARAMS)
            response = client.list_entities(params)

        entities = response.get("data") if isinstance(response, dict) else None
        records = [format_entity(entity) for entity in as_list(entities)]
        logger.info("Listed entities", mode=mode.value, count=len(records))
        return records
