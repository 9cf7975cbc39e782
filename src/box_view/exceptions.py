"""
Exceptions for the Box View SDK.

Every failure surfaces as a BoxViewError carrying a short machine-readable
code (one of the constants below) and a human-readable message.
"""

from typing import Dict, Any, Optional


BAD_REQUEST_ERROR = "bad_request"
HTTP_CLIENT_ERROR = "http_client_error"
INVALID_FILE_ERROR = "invalid_file"
INVALID_RESPONSE_ERROR = "invalid_response"
JSON_RESPONSE_ERROR = "server_response_not_valid_json"
METHOD_NOT_ALLOWED_ERROR = "method_not_allowed"
NOT_FOUND_ERROR = "not_found"
REQUEST_TIMEOUT_ERROR = "request_timeout"
SERVER_ERROR = "server_error"
TOO_MANY_REQUESTS_ERROR = "too_many_requests"
UNAUTHORIZED_ERROR = "unauthorized"
UNSUPPORTED_MEDIA_TYPE_ERROR = "unsupported_media_type"

ERROR_CODES = frozenset(
    {
        BAD_REQUEST_ERROR,
        HTTP_CLIENT_ERROR,
        INVALID_FILE_ERROR,
        INVALID_RESPONSE_ERROR,
        JSON_RESPONSE_ERROR,
        METHOD_NOT_ALLOWED_ERROR,
        NOT_FOUND_ERROR,
        REQUEST_TIMEOUT_ERROR,
        SERVER_ERROR,
        TOO_MANY_REQUESTS_ERROR,
        UNAUTHORIZED_ERROR,
        UNSUPPORTED_MEDIA_TYPE_ERROR,
    }
)


class BoxViewError(Exception):
    """Raised for any failure talking to the Box View API."""

    def __init__(
        self,
        message: Optional[str],
        code: str,
        details: Optional[Dict[str, Any]] = None,
    ):
        message = message or code
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def __repr__(self) -> str:
        return f"BoxViewError(code={self.code!r}, message={self.message!r})"
