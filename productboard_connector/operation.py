"""Operation interface for host-facing triggers, searches, and creates."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any

from productboard_connector.client import ProductboardClient
from productboard_connector.fields import InputField, OutputField


class OperationKind(str, Enum):
    """Where the host exposes an operation."""

    TRIGGER = "trigger"
    SEARCH = "search"
    CREATE = "create"


class Operation(ABC):
    """Abstract base class for a single host operation.

    Subclasses declare their host metadata as class attributes and implement
    ``perform``, which issues the HTTP call(s) and returns flat records.
    """

    key: str
    noun: str
    kind: OperationKind
    label: str
    description: str
    input_fields: list[InputField] = []
    output_fields: list[OutputField] = []
    sample: dict[str, Any] = {}

    @abstractmethod
    def perform(self, client: ProductboardClient, input_data: dict[str, Any]) -> list[dict[str, Any]] | dict[str, Any]:
        """Run the operation.

        Searches and triggers return a list of records; creates return a
        single record.
        """
        pass

    def describe(self) -> dict[str, Any]:
        """Return the host metadata for this operation."""
        return {
            "key": self.key,
            "noun": self.noun,
            "kind": self.kind.value,
            "display": {"label": self.label, "description": self.description},
            "operation": {
                "inputFields": [input_field.to_dict() for input_field in self.input_fields],
                "outputFields": [output_field.to_dict() for output_field in self.output_fields],
                "sample": dict(self.sample),
            },
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}(key={self.key!r})"
