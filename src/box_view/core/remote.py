"""
Pure functions for remote API operations.

Functions for building request URIs and headers, choosing the HTTP method,
and mapping responses to errors without I/O dependencies.
"""

import json
from typing import Dict, Any, Mapping, Optional
from urllib.parse import urlencode, urlunsplit

from ..exceptions import (
    BAD_REQUEST_ERROR,
    METHOD_NOT_ALLOWED_ERROR,
    NOT_FOUND_ERROR,
    SERVER_ERROR,
    TOO_MANY_REQUESTS_ERROR,
    UNAUTHORIZED_ERROR,
    UNSUPPORTED_MEDIA_TYPE_ERROR,
)

PROTOCOL = "https"
USER_AGENT = "box-view-python/1.0"

_STATUS_ERRORS = {
    400: BAD_REQUEST_ERROR,
    401: UNAUTHORIZED_ERROR,
    404: NOT_FOUND_ERROR,
    405: METHOD_NOT_ALLOWED_ERROR,
    415: UNSUPPORTED_MEDIA_TYPE_ERROR,
    429: TOO_MANY_REQUESTS_ERROR,
}


def clean_params(params: Optional[Mapping[str, Any]]) -> Dict[str, str]:
    """Drop None values and stringify the rest."""
    if not params:
        return {}
    return {key: str(value) for key, value in params.items() if value is not None}


def build_uri(
    host: str,
    base_path: str,
    path: str,
    query: Optional[Mapping[str, str]] = None,
) -> str:
    """Build ``https://host/base_path/path?query``."""
    full_path = base_path.rstrip("/") + "/" + path.lstrip("/")
    query_string = urlencode(clean_params(query))
    return urlunsplit((PROTOCOL, host, full_path, query_string, ""))


def build_auth_headers(api_key: str, raw_response: bool = False) -> Dict[str, str]:
    """Build authentication and content negotiation headers."""
    return {
        "Authorization": f"Token {api_key}",
        "User-Agent": USER_AGENT,
        "Accept": "*/*" if raw_response else "application/json",
    }


def redact_headers(headers: Mapping[str, str]) -> Dict[str, str]:
    """Copy headers with the API key hidden."""
    redacted = dict(headers)
    if "Authorization" in redacted:
        redacted["Authorization"] = "Token ***"
    return redacted


def resolve_method(
    override: Optional[str], has_file: bool, body: Mapping[str, str]
) -> str:
    """Choose the HTTP method: explicit override, else POST with a body, else GET."""
    if override:
        return override.upper()
    if has_file or body:
        return "POST"
    return "GET"


def resolve_timeout(timeout: Optional[int], default: int) -> int:
    """Per-call retry timeout, falling back to the default when unset or not positive."""
    if timeout is not None and timeout > 0:
        return timeout
    return default


def map_status_code_to_error(status_code: int) -> Optional[str]:
    """Map an HTTP status code to an error code, or None for success."""
    if status_code in _STATUS_ERRORS:
        return _STATUS_ERRORS[status_code]
    if 500 <= status_code < 600:
        return SERVER_ERROR
    return None


def format_error_message(
    message: Optional[str],
    method: Optional[str] = None,
    url: Optional[str] = None,
    query: Optional[str] = None,
    headers: Optional[Mapping[str, str]] = None,
    request_body: Optional[str] = None,
    response_body: Optional[str] = None,
) -> str:
    """Append request and response context to an error message."""
    text = message or ""

    if method is not None:
        text += "\n"
        text += f"Method: {method}\n"
        text += f"URL: {url}\n"
        text += f"Query: {query or ''}\n"
        text += f"Headers: {json.dumps(redact_headers(headers or {}))}\n"
        text += f"Request Body: {request_body or ''}\n"

    if response_body is not None:
        text += "\n"
        text += f"Response Body: {response_body}\n"

    return text


def extract_error_message(payload: Mapping[str, Any]) -> Optional[str]:
    """Return the server's error message when a JSON payload reports an error."""
    if str(payload.get("status")) != "error":
        return None
    return str(payload.get("error_message") or "Server Error")
