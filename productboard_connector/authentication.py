"""API token authentication for Productboard API v2."""

from typing import Any

import structlog

from productboard_connector.client import ProductboardClient
from productboard_connector.fields import InputField

logger = structlog.get_logger()

AUTH_TYPE = "custom"
CONNECTION_LABEL = "Productboard (API v2)"

AUTH_FIELDS = [
    InputField(
        "apiToken",
        "API Token",
        "password",
        required=True,
        help_text=(
            "Your Productboard API token. "
            "Generate one from Productboard → Settings → Integrations → Public API."
        ),
    ),
]


def verify_credentials(client: ProductboardClient) -> dict[str, str]:
    """Validate the API token by fetching entity configurations.

    Raises:
        AuthenticationError: If the token is rejected
    """
    logger.info("Testing Productboard credentials")
    client.get_configurations()
    logger.info("Productboard credentials valid")
    return {"id": "productboard_connection", "name": "Productboard API v2"}


def describe_authentication() -> dict[str, Any]:
    return {
        "type": AUTH_TYPE,
        "fields": [auth_field.to_dict() for auth_field in AUTH_FIELDS],
        "connectionLabel": CONNECTION_LABEL,
    }
