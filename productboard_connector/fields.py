"""Host field definitions for operation inputs and outputs."""

from dataclasses import dataclass
from typing import Any


@dataclass
class InputField:
    """An input field rendered by the host for an operation."""

    key: str
    label: str
    type: str = "string"
    required: bool = False
    choices: dict[str, str] | None = None
    default: str | None = None
    help_text: str = ""

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "key": self.key,
            "label": self.label,
            "type": self.type,
            "required": self.required,
        }
        if self.choices is not None:
            data["choices"] = dict(self.choices)
        if self.default is not None:
            data["default"] = self.default
        if self.help_text:
            data["helpText"] = self.help_text
        return data


@dataclass
class OutputField:
    """An output field as displayed by the host."""

    key: str
    label: str
    type: str = "string"

    def to_dict(self) -> dict[str, Any]:
        return {"key": self.key, "label": self.label, "type": self.type}


# Nested health values use the host's double-underscore notation.
ENTITY_OUTPUT_FIELDS: list[OutputField] = [
    OutputField("id", "Entity ID"),
    OutputField("type", "Entity Type"),
    OutputField("name", "Name"),
    OutputField("description", "Description (HTML)"),
    OutputField("descriptionPlainText", "Description"),
    OutputField("url", "Productboard URL"),
    OutputField("status", "Status"),
    OutputField("statusId", "Status ID"),
    OutputField("archived", "Archived", "boolean"),
    OutputField("ownerEmail", "Owner Email"),
    OutputField("ownerId", "Owner ID"),
    OutputField("startDate", "Start Date"),
    OutputField("endDate", "End Date"),
    OutputField("createdAt", "Created At", "datetime"),
    OutputField("updatedAt", "Updated At", "datetime"),
    OutputField("health__id", "Health ID"),
    OutputField("health__status", "Health Status"),
    OutputField("health__previousStatus", "Health Previous Status"),
    OutputField("health__mode", "Health Mode"),
    OutputField("health__comment", "Health Comment (HTML)"),
    OutputField("health__commentPlainText", "Health Comment"),
    OutputField("health__lastUpdatedAt", "Health Last Updated", "datetime"),
    OutputField("health__updatedByEmail", "Health Updated By (Email)"),
    OutputField("health__updatedById", "Health Updated By (ID)"),
]
