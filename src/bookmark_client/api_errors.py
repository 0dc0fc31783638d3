"""
API error parsing for the bookmark client.

Turns HTTP error responses from the Bookmarks API into a small set of
categories the client can react to (e.g. prompt a sign-in on `auth`).
"""
from typing import Any, Literal

import httpx

ErrorCategory = Literal[
    "auth",        # 401 - Missing, invalid, or expired token
    "not_found",   # 404 - Bookmark missing or owned by someone else
    "validation",  # 400/422 - Malformed url or title
    "internal",    # 5xx or unexpected errors
]


class NotSignedInError(Exception):
    """Raised when there is no session token to send with a request."""

    def __init__(self) -> None:
        super().__init__("Please sign in")


class ApiError(Exception):
    """An error response from the Bookmarks API."""

    def __init__(self, category: ErrorCategory, message: str, status_code: int) -> None:
        self.category = category
        self.message = message
        self.status_code = status_code
        super().__init__(message)


def parse_http_error(e: httpx.HTTPStatusError) -> ApiError:
    """Parse an HTTP status error into an ApiError with a semantic category."""
    status = e.response.status_code

    if status == 401:
        return ApiError("auth", "Invalid or expired token", status)
    if status == 404:
        return ApiError("not_found", "Bookmark not found", status)
    if status in (400, 422):
        return ApiError("validation", _extract_validation_message(e), status)
    detail = _safe_get_detail(e)
    message = detail if isinstance(detail, str) and detail else f"API error {status}"
    return ApiError("internal", message, status)


def _safe_get_detail(e: httpx.HTTPStatusError) -> Any:
    """Safely extract `detail` from an error response body."""
    try:
        body = e.response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        return body.get("detail")
    return None


def _extract_validation_message(e: httpx.HTTPStatusError) -> str:
    """Flatten a validation error body into `field: message` pairs."""
    detail = _safe_get_detail(e)
    if isinstance(detail, list):
        messages = []
        for err in detail:
            if isinstance(err, dict):
                loc = err.get("loc") or ["unknown"]
                messages.append(f"{loc[-1]}: {err.get('msg', 'invalid')}")
        return "; ".join(messages) if messages else "Validation error"
    if isinstance(detail, str) and detail:
        return detail
    return "Validation error"
