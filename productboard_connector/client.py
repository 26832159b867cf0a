"""HTTP client for the Productboard v2 REST API using httpx."""

from collections.abc import Generator
from typing import Any

import httpx
import structlog

from productboard_connector.errors import raise_for_api_error
from productboard_connector.filters import FilterShape

logger = structlog.get_logger()

API_BASE = "https://api.productboard.com"


class BearerAuth(httpx.Auth):
    """Per-request bearer token auth for the Productboard API."""

    def __init__(self, api_token: str) -> None:
        self.api_token = api_token

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        request.headers["Authorization"] = f"Bearer {self.api_token}"
        request.headers["Accept"] = "application/json"
        yield request


class ProductboardClient:
    """Thin wrapper around httpx with Productboard auth and error handling.

    An injected ``http_client`` is used as is: the token is sent per request
    and the client is left open on ``close``. A client built here gets the
    error response hook and is closed with the wrapper.
    """

    def __init__(
        self,
        api_token: str,
        base_url: str = API_BASE,
        http_client: httpx.Client | None = None,
        search_shape: FilterShape = FilterShape.SEARCH_ENVELOPE,
        timeout: float = 30.0,
    ) -> None:
        """Initialize the client.

        Args:
            api_token: Productboard API token
            base_url: API root, without the ``/v2`` prefix
            http_client: Pre-built httpx client (used for tests and host injection)
            search_shape: Body shape sent to the advanced search endpoint
            timeout: Request timeout in seconds for the default client
        """
        self.api_token = api_token
        if not self.api_token:
            raise ValueError("Productboard API token required")
        if search_shape == FilterShape.QUERY_PARAMS:
            raise ValueError("search_shape must be a search body shape, not query params")

        self.base_url = base_url.rstrip("/")
        self.search_shape = search_shape

        self._auth = BearerAuth(api_token)
        self._owns_http = http_client is None
        if http_client is None:
            http_client = httpx.Client(timeout=timeout, event_hooks={"response": [raise_for_api_error]})
        self.http = http_client

        logger.debug("Productboard client initialized", base_url=self.base_url, search_shape=search_shape.value)

    def request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        """Send a request and return the decoded JSON body.

        Raises:
            ProductboardError: For any response with status 400 or above
        """
        url = f"{self.base_url}{path}"
        logger.debug("Productboard request", method=method, path=path, params=params)
        response = self.http.request(method, url, params=params, json=json, auth=self._auth)
        if not self._owns_http:
            raise_for_api_error(response)
        logger.debug("Productboard response", method=method, path=path, status_code=response.status_code)
        if not response.content:
            return {}
        return response.json()

    def list_entities(self, params: dict[str, Any] | None = None) -> Any:
        return self.request("GET", "/v2/entities", params=params)

    def search_entities(self, body: dict[str, Any]) -> Any:
        return self.request("POST", "/v2/entities/search", json=body)

    def get_entity(self, entity_id: str) -> Any:
        return self.request("GET", f"/v2/entities/{entity_id}")

    def update_entity(self, entity_id: str, body: dict[str, Any]) -> Any:
        return self.request("PATCH", f"/v2/entities/{entity_id}", json=body)

    def get_entity_relationships(self, entity_id: str) -> Any:
        return self.request("GET", f"/v2/entities/{entity_id}/relationships")

    def create_note_relationship(self, note_id: str, body: dict[str, Any]) -> Any:
        return self.request("POST", f"/v2/notes/{note_id}/relationships", json=body)

    def get_configurations(self) -> Any:
        """Fetch entity configurations; used to validate the API token."""
        return self.request("GET", "/v2/entities/configurations")

    def close(self) -> None:
        if self._owns_http:
            self.http.close()

    def __enter__(self) -> "ProductboardClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
