"""Productboard API error taxonomy and translation of error responses."""

import json
from typing import Any

import httpx
import structlog

logger = structlog.get_logger()

UNKNOWN_ERROR_MESSAGE = "Unknown API error"


class ProductboardError(Exception):
    """Base class for errors returned by the Productboard API."""

    category = "ApiError"

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __repr__(self) -> str:
        return f"{type(self).__name__}(status_code={self.status_code}, message={self.message!r})"


class AuthenticationError(ProductboardError):
    category = "AuthenticationError"


class ForbiddenError(ProductboardError):
    category = "ForbiddenError"


class NotFoundError(ProductboardError):
    category = "NotFoundError"


class RateLimitError(ProductboardError):
    category = "RateLimitError"


class ApiError(ProductboardError):
    category = "ApiError"


# status -> (error class, fixed message)
STATUS_ERRORS: dict[int, tuple[type[ProductboardError], str]] = {
    401: (AuthenticationError, "Authentication failed. Please check your Productboard API token."),
    403: (ForbiddenError, "Access denied. Your API token may not have permission for this action."),
    404: (NotFoundError, "Resource not found. The entity ID may be incorrect."),
    429: (RateLimitError, "Rate limit exceeded. Productboard allows 50 requests/second. Please retry."),
}


def _dump(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), default=str)


def _error_item_message(item: Any) -> str:
    if isinstance(item, dict):
        message = item.get("message") or item.get("detail")
        if not message:
            return _dump(item)
        return message if isinstance(message, str) else _dump(message)
    return item if isinstance(item, str) else _dump(item)


def extract_error_message(body: Any) -> str:
    """Extract a human readable message from an error response body.

    Known shapes are tried in a fixed order: ``message``, ``error`` (string
    or object), ``errors[]``, ``detail`` (RFC 7807), ``title``. Anything
    else is serialized whole.

    Args:
        body: Decoded JSON body, raw text, or None

    Returns:
        A non-empty message
    """
    if isinstance(body, str):
        return body.strip() or UNKNOWN_ERROR_MESSAGE
    if not isinstance(body, dict):
        return _dump(body) if body not in (None, [], "") else UNKNOWN_ERROR_MESSAGE

    if body.get("message"):
        return str(body["message"])

    error = body.get("error")
    if error:
        if isinstance(error, str):
            return error
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        return _dump(error)

    errors = body.get("errors")
    if isinstance(errors, list) and errors:
        return "; ".join(_error_item_message(item) for item in errors)

    if body.get("detail"):
        return str(body["detail"])

    if body.get("title"):
        return str(body["title"])

    if body:
        return _dump(body)

    return UNKNOWN_ERROR_MESSAGE


def translate_error(status_code: int, body: Any) -> ProductboardError | None:
    """Translate an HTTP status and body into a typed error.

    Returns:
        The error to raise, or None for statuses below 400
    """
    if status_code < 400:
        return None

    if status_code in STATUS_ERRORS:
        error_class, message = STATUS_ERRORS[status_code]
        return error_class(message, status_code)

    message = extract_error_message(body)
    return ApiError(f"Productboard API error ({status_code}): {message}", status_code)


def decode_body(response: httpx.Response) -> Any:
    """Decode a response body as JSON, falling back to raw text."""
    if not response.content:
        return {}
    try:
        return response.json()
    except ValueError:
        return response.text


def raise_for_api_error(response: httpx.Response) -> None:
    """Response hook raising a typed error for any status of 400 or above."""
    if response.status_code < 400:
        return

    response.read()
    error = translate_error(response.status_code, decode_body(response))
    logger.debug(
        "Productboard API returned an error",
        status_code=response.status_code,
        category=error.category,
        url=str(response.request.url),
    )
    raise error
