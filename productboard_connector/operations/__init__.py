"""Operation implementations."""

from productboard_connector.operations.create_health_update import CreateHealthUpdate
from productboard_connector.operations.create_note_relationship import CreateNoteRelationship
from productboard_connector.operations.get_entity import GetEntity
from productboard_connector.operations.get_relationships import GetEntityRelationships
from productboard_connector.operations.health_updates import HealthUpdates
from productboard_connector.operations.list_entities import ListEntities

__all__ = [
    "CreateHealthUpdate",
    "CreateNoteRelationship",
    "GetEntity",
    "GetEntityRelationships",
    "HealthUpdates",
    "ListEntities",
]
