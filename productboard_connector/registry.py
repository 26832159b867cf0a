"""Registry of the operations exposed to the automation host."""

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from productboard_connector import __version__
from productboard_connector.authentication import describe_authentication
from productboard_connector.operation import Operation, OperationKind
from productboard_connector.operations import (
    CreateHealthUpdate,
    CreateNoteRelationship,
    GetEntity,
    GetEntityRelationships,
    HealthUpdates,
    ListEntities,
)


@dataclass
class Integration:
    """Operations grouped the way the host registers them."""

    version: str = __version__
    triggers: dict[str, Operation] = field(default_factory=dict)
    searches: dict[str, Operation] = field(default_factory=dict)
    creates: dict[str, Operation] = field(default_factory=dict)

    def register(self, operation: Operation) -> None:
        """Register an operation under its kind, keyed by its key."""
        groups = {
            OperationKind.TRIGGER: self.triggers,
            OperationKind.SEARCH: self.searches,
            OperationKind.CREATE: self.creates,
        }
        group = groups[operation.kind]
        if operation.key in group:
            raise ValueError(f"Duplicate {operation.kind.value} key: '{operation.key}'")
        group[operation.key] = operation

    def operations(self) -> Iterator[Operation]:
        yield from self.triggers.values()
        yield from self.searches.values()
        yield from self.creates.values()

    def get_operation(self, key: str) -> Operation:
        """Look up an operation by key across all kinds."""
        for operation in self.operations():
            if operation.key == key:
                return operation
        available = [operation.key for operation in self.operations()]
        raise KeyError(f"Unknown operation: '{key}'. Available operations: {available}")

    def describe(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "authentication": describe_authentication(),
            "triggers": {key: operation.describe() for key, operation in self.triggers.items()},
            "searches": {key: operation.describe() for key, operation in self.searches.items()},
            "creates": {key: operation.describe() for key, operation in self.creates.items()},
        }


def build_integration() -> Integration:
    """Build the integration with every supported operation registered."""
    integration = Integration()
    for operation in (
        HealthUpdates(),
        ListEntities(),
        GetEntity(),
        GetEntityRelationships(),
        CreateHealthUpdate(),
        CreateNoteRelationship(),
    ):
        integration.register(operation)
    return integration
