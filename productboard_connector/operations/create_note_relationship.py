"""Create Note Relationship action: link a note (insight) to an entity."""

from typing import Any

import structlog

from productboard_connector.client import ProductboardClient
from productboard_connector.fields import InputField, OutputField
from productboard_connector.formatter import unwrap_data
from productboard_connector.models import NoteRelationshipRecord, RelationshipType
from productboard_connector.operation import Operation, OperationKind

logger = structlog.get_logger()


def note_api_url(base_url: str, note_id: str) -> str:
    return f"{base_url}/v2/notes/{note_id}"


def build_note_relationship_payload(target_entity_id: str) -> dict[str, Any]:
    """Build the request body for a link relationship."""
    return {
        "data": {
            "type": RelationshipType.LINK.value,
            "target": {"id": target_entity_id, "type": RelationshipType.LINK.value},
        }
    }


def parse_note_relationship_response(
    payload: Any,
    note_id: str,
    target_entity_id: str,
    base_url: str,
) -> NoteRelationshipRecord:
    """Parse the create-relationship response.

    Depending on the API revision the response is either the created
    relationship (it carries a ``target``) or the enclosing note.
    """
    data = unwrap_data(payload)
    data = data if isinstance(data, dict) else {}
    links = data.get("links") if isinstance(data.get("links"), dict) else {}
    target = data.get("target")

    if isinstance(target, dict):
        logger.debug("Relationship response shape", shape="relationship", note_id=note_id)
        return NoteRelationshipRecord(
            noteId=note_id,
            targetEntityId=target.get("id") or target_entity_id,
            relationshipType=data.get("type") or RelationshipType.LINK.value,
            noteType="",
            noteSelfLink=note_api_url(base_url, note_id),
        )

    logger.debug("Relationship response shape", shape="note", note_id=note_id)
    return NoteRelationshipRecord(
        noteId=data.get("id") or note_id,
        targetEntityId=target_entity_id,
        relationshipType=RelationshipType.LINK.value,
        noteType=data.get("type") or "simple",
        noteSelfLink=links.get("self") or note_api_url(base_url, note_id),
    )


class CreateNoteRelationship(Operation):
    """Link a note to a feature, product, or component.

    A note may have one customer relationship (replaced on re-creation) and
    any number of link relationships.
    """

    key = "createNoteRelationship"
    noun = "Note Relationship"
    kind = OperationKind.CREATE
    label = "Create Note Relationship"
    description = "Creates a link between a ProductBoard note (insight) and a feature, product, or component."

    input_fields = [
        InputField(
            "noteId",
            "Note ID",
            required=True,
            help_text="The UUID of the note to link (not the base64-encoded URL ID).",
        ),
        InputField(
            "targetEntityId",
            "Target Entity ID",
            required=True,
            help_text="The UUID of the feature, product, or component to link to.",
        ),
    ]
    output_fields = [
        OutputField("success", "Success", "boolean"),
        OutputField("noteId", "Note ID"),
        OutputField("targetEntityId", "Target Entity ID"),
        OutputField("relationshipType", "Relationship Type"),
        OutputField("noteType", "Note Type"),
        OutputField("noteSelfLink", "Note API Link"),
    ]

    sample = {
        "success": True,
        "noteId": "62099d4c-571f-405d-abc0-9e3925d053ee",
        "targetEntityId": "7e8581c9-900d-40f5-bf91-5d5cb790a53d",
        "relationshipType": "link",
        "noteType": "simple",
        "noteSelfLink": "https://api.productboard.com/v2/notes/62099d4c-571f-405d-abc0-9e3925d053ee",
    }

    def perform(self, client: ProductboardClient, input_data: dict[str, Any]) -> dict[str, Any]:
        note_id = str(input_data.get("noteId") or "").strip()
        target_entity_id = str(input_data.get("targetEntityId") or "").strip()
        if not note_id or not target_entity_id:
            raise ValueError("noteId and targetEntityId are required to link a note")

        logger.info("Linking note to entity", note_id=note_id, target_entity_id=target_entity_id)
        response = client.create_note_relationship(note_id, build_note_relationship_payload(target_entity_id))

        record = parse_note_relationship_response(response, note_id, target_entity_id, client.base_url)
        logger.info("Note linked", note_id=note_id, target_entity_id=record.targetEntityId)
        return record.to_dict()
