"""CLI harness for running Productboard connector operations outside a host."""

import json
from typing import Annotated, Any, Literal

import structlog
from cyclopts import App, Parameter

from productboard_connector.authentication import verify_credentials
from productboard_connector.client import API_BASE, ProductboardClient
from productboard_connector.config import TOKEN_ENV_VAR, get_config, validate_setting
from productboard_connector.config_commands import config_app
from productboard_connector.filters import FilterShape
from productboard_connector.formatter import flatten_record
from productboard_connector.registry import build_integration

logger = structlog.get_logger()

app = App(
    help="Productboard Connector - entity health searches and actions",
)

app.command(config_app)


def configure_logging(log_level: str) -> None:
    """Configure structlog with the specified log level."""
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(min_level=log_level.lower()))


def get_client() -> ProductboardClient:
    """Build a client from the configured token, base URL, and search shape."""
    config = get_config()
    token = config.api_token()
    if not token:
        raise ValueError(
            "Productboard API token not configured. Set it using:\n"
            "  pbc config set api_token <token>\n"
            f"or export {TOKEN_ENV_VAR}=<token>"
        )

    search_shape = validate_setting("search_shape", config.get("search_shape") or FilterShape.SEARCH_ENVELOPE.value)

    return ProductboardClient(
        api_token=token,
        base_url=config.get("base_url", API_BASE) or API_BASE,
        search_shape=FilterShape(search_shape),
    )


def run_operation(key: str, input_data: dict[str, Any]) -> Any:
    """Run a registered operation with the configured client."""
    operation = build_integration().get_operation(key)
    inputs = {k: v for k, v in input_data.items() if v is not None}
    logger.debug("Running operation", key=key, inputs=sorted(inputs))
    with get_client() as client:
        return operation.perform(client, inputs)


def print_records(result: Any, flat: bool = False) -> None:
    """Print a record or list of records as JSON."""
    if flat:
        if isinstance(result, list):
            result = [flatten_record(record) for record in result]
        else:
            result = flatten_record(result)
    print(json.dumps(result, indent=2, default=str))


@app.command(name="auth-test")
def auth_test() -> None:
    """Check that the configured API token is accepted."""
    with get_client() as client:
        account = verify_credentials(client)
    print(f"Connected: {account['name']}")


@app.command(name="list")
def list_entities(
    entity_type: str | None = None,
    owner_ids: str | None = None,
    status_names: str | None = None,
    health_status: str | None = None,
    archived: Literal["false", "true", "all"] | None = None,
    parent_id: str | None = None,
    product_id: str | None = None,
    component_id: str | None = None,
    initiative_id: str | None = None,
    objective_id: str | None = None,
    release_id: str | None = None,
    start_date_from: str | None = None,
    start_date_to: str | None = None,
    end_date_from: str | None = None,
    end_date_to: str | None = None,
    flat: bool = False,
) -> None:
    """Find entities, optionally filtered."""
    records = run_operation(
        "listEntities",
        {
            "entityType": entity_type,
            "ownerIds": owner_ids,
            "statusNames": status_names,
            "healthStatus": health_status,
            "archived": archived,
            "parentId": parent_id,
            "productId": product_id,
            "componentId": component_id,
            "initiativeId": initiative_id,
            "objectiveId": objective_id,
            "releaseId": release_id,
            "startDateFrom": start_date_from,
            "startDateTo": start_date_to,
            "endDateFrom": end_date_from,
            "endDateTo": end_date_to,
        },
    )
    print_records(records, flat)


@app.command
def get(entity_id: str, flat: bool = False) -> None:
    """Get an entity by ID."""
    print_records(run_operation("getEntity", {"entityId": entity_id}), flat)


@app.command
def relationships(entity_id: str) -> None:
    """List relationships of an entity."""
    print_records(run_operation("getEntityRelationships", {"entityId": entity_id}))


@app.command(name="health-set")
def health_set(
    entity_id: str,
    status: Literal["notSet", "onTrack", "atRisk", "offTrack"],
    comment: str | None = None,
    mode: Literal["manual", "calculated"] = "manual",
    created_by_id: str | None = None,
    flat: bool = False,
) -> None:
    """Set the health status of an entity."""
    record = run_operation(
        "createHealthUpdate",
        {
            "entityId": entity_id,
            "status": status,
            "comment": comment,
            "mode": mode,
            "createdById": created_by_id,
        },
    )
    print_records(record, flat)


@app.command(name="note-link")
def note_link(note_id: str, target_entity_id: str) -> None:
    """Link a note to a feature, product, or component."""
    print_records(run_operation("createNoteRelationship", {"noteId": note_id, "targetEntityId": target_entity_id}))


@app.command(name="health-updates")
def health_updates(entity_type: str | None = None, flat: bool = False) -> None:
    """Poll entities with health values, newest first."""
    print_records(run_operation("healthUpdates", {"entityType": entity_type}), flat)


@app.command
def describe(key: str | None = None) -> None:
    """Print host metadata for one operation, or for the whole integration."""
    integration = build_integration()
    if key:
        print(json.dumps(integration.get_operation(key).describe(), indent=2))
    else:
        print(json.dumps(integration.describe(), indent=2))


@app.meta.default
def main(
    *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
    log_level: Literal["debug", "info", "warning", "error", "critical"] = "critical",
) -> None:
    """Main entry point with global options."""
    configure_logging(log_level)
    app(tokens)


if __name__ == "__main__":
    app.meta()
