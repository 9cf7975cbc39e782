"""
Core pure functions for the SDK.

This package contains I/O-free functions for building requests, mapping
responses to errors, and encoding parameters.
"""

from .remote import (
    PROTOCOL,
    USER_AGENT,
    clean_params,
    build_uri,
    build_auth_headers,
    redact_headers,
    resolve_method,
    resolve_timeout,
    map_status_code_to_error,
    format_error_message,
    extract_error_message,
)

from .utils import (
    DateInput,
    to_utc,
    parse_date,
    to_rfc3339,
    encode_flag,
    join_thumbnails,
    parse_retry_after,
)

__all__ = [
    # Remote functions
    "PROTOCOL",
    "USER_AGENT",
    "clean_params",
    "build_uri",
    "build_auth_headers",
    "redact_headers",
    "resolve_method",
    "resolve_timeout",
    "map_status_code_to_error",
    "format_error_message",
    "extract_error_message",
    # Parameter encoding
    "DateInput",
    "to_utc",
    "parse_date",
    "to_rfc3339",
    "encode_flag",
    "join_thumbnails",
    "parse_retry_after",
]
