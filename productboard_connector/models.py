"""Data models for the Productboard connector."""

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any


class EntityType(str, Enum):
    """Entity types exposed by the Productboard v2 entities API."""

    PRODUCT = "product"
    COMPONENT = "component"
    FEATURE = "feature"
    SUBFEATURE = "subfeature"
    INITIATIVE = "initiative"
    OBJECTIVE = "objective"
    KEY_RESULT = "keyResult"
    RELEASE = "release"
    RELEASE_GROUP = "releaseGroup"


class HealthStatus(str, Enum):
    """Health status values."""

    NOT_SET = "notSet"
    ON_TRACK = "onTrack"
    AT_RISK = "atRisk"
    OFF_TRACK = "offTrack"


class HealthMode(str, Enum):
    """How a health value was produced."""

    MANUAL = "manual"
    CALCULATED = "calculated"


class ArchivedFilter(str, Enum):
    """Archived filter states. ALL means no archived constraint is sent."""

    ACTIVE = "false"
    ARCHIVED = "true"
    ALL = "all"


class RelationshipType(str, Enum):
    """Relationship types returned by the entity relationships endpoint."""

    LINK = "link"
    PARENT = "parent"
    CHILD = "child"


ENTITY_TYPE_CHOICES: dict[str, str] = {
    EntityType.PRODUCT.value: "Product",
    EntityType.COMPONENT.value: "Component",
    EntityType.FEATURE.value: "Feature",
    EntityType.SUBFEATURE.value: "Subfeature",
    EntityType.INITIATIVE.value: "Initiative",
    EntityType.OBJECTIVE.value: "Objective",
    EntityType.KEY_RESULT.value: "Key Result",
    EntityType.RELEASE.value: "Release",
    EntityType.RELEASE_GROUP.value: "Release Group",
}

HEALTH_STATUS_CHOICES: dict[str, str] = {
    HealthStatus.NOT_SET.value: "Not Set",
    HealthStatus.ON_TRACK.value: "On Track",
    HealthStatus.AT_RISK.value: "At Risk",
    HealthStatus.OFF_TRACK.value: "Off Track",
}

HEALTH_MODE_CHOICES: dict[str, str] = {
    HealthMode.MANUAL.value: "Manual",
    HealthMode.CALCULATED.value: "Calculated",
}

ARCHIVED_CHOICES: dict[str, str] = {
    ArchivedFilter.ACTIVE.value: "Active only",
    ArchivedFilter.ARCHIVED.value: "Archived only",
    ArchivedFilter.ALL.value: "All (active and archived)",
}


@dataclass
class HealthRecord:
    """Flat projection of an entity's current health value."""

    id: str | None = None
    status: str | None = None
    previousStatus: str = ""
    mode: str | None = None
    comment: str = ""
    commentPlainText: str = ""
    lastUpdatedAt: str | None = None
    updatedByEmail: str = ""
    updatedById: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class EntityRecord:
    """Flat projection of a Productboard entity, as returned to the host."""

    id: str | None
    type: str | None
    name: str = ""
    description: str = ""
    descriptionPlainText: str = ""
    url: str = ""
    status: str = ""
    statusId: str = ""
    archived: bool = False
    ownerEmail: str = ""
    ownerId: str = ""
    startDate: str = ""
    endDate: str = ""
    createdAt: str | None = None
    updatedAt: str | None = None
    health: HealthRecord | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to a host payload, keeping ``health`` as a nested dict or None."""
        return asdict(self)


@dataclass
class RelationshipRecord:
    """Represents a relationship from a source entity to a related entity."""

    id: str
    sourceEntityId: str
    relationshipType: str = ""
    relatedEntityId: str = ""
    relatedEntityType: str = ""
    relatedEntityUrl: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class NoteRelationshipRecord:
    """Confirmation record for a note linked to an entity."""

    noteId: str
    targetEntityId: str
    success: bool = True
    relationshipType: str = RelationshipType.LINK.value
    noteType: str = ""
    noteSelfLink: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
