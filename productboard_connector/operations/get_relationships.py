"""Get Entity Relationships search."""

from typing import Any

import structlog

from productboard_connector.client import ProductboardClient
from productboard_connector.errors import NotFoundError
from productboard_connector.fields import InputField, OutputField
from productboard_connector.formatter import as_list, format_relationship, unwrap_data
from productboard_connector.operation import Operation, OperationKind

logger = structlog.get_logger()


class GetEntityRelationships(Operation):
    """Retrieve parent, child, and linked entities for an entity."""

    key = "getEntityRelationships"
    noun = "Entity Relationship"
    kind = OperationKind.SEARCH
    label = "Get Entity Relationships"
    description = "Retrieves all relationships for an entity, including parent, child, and linked entities."

    input_fields = [
        InputField(
            "entityId",
            "Entity ID",
            required=True,
            help_text="The unique ID of the entity to retrieve relationships for.",
        ),
    ]
    output_fields = [
        OutputField("id", "Relationship ID"),
        OutputField("sourceEntityId", "Source Entity ID"),
        OutputField("relationshipType", "Relationship Type"),
        OutputField("relatedEntityId", "Related Entity ID"),
        OutputField("relatedEntityType", "Related Entity Type"),
        OutputField("relatedEntityUrl", "Related Entity API URL"),
    ]

    sample = {
        "id": "766ec003-95ef-45fc-9b2d-94532b247df2_017a2f72-d597-4e36-98b9-cee533018dd0",
        "sourceEntityId": "766ec003-95ef-45fc-9b2d-94532b247df2",
        "relationshipType": "link",
        "relatedEntityId": "017a2f72-d597-4e36-98b9-cee533018dd0",
        "relatedEntityType": "feature",
        "relatedEntityUrl": "https://api.productboard.com/v2/entities/017a2f72-d597-4e36-98b9-cee533018dd0",
    }

    def perform(self, client: ProductboardClient, input_data: dict[str, Any]) -> list[dict[str, Any]]:
        entity_id = str(input_data.get("entityId") or "").strip()
        if not entity_id:
            return []

        logger.info("Listing entity relationships", entity_id=entity_id)
        try:
            response = client.get_entity_relationships(entity_id)
        except NotFoundError:
            logger.info("Entity not found", entity_id=entity_id)
            return []

        records = [format_relationship(entity_id, relationship) for relationship in as_list(unwrap_data(response))]
        logger.info("Retrieved entity relationships", entity_id=entity_id, count=len(records))
        return records
