"""
Request options and shared value types.
"""

from dataclasses import dataclass
from typing import BinaryIO, Optional


QUEUED = "queued"
PROCESSING = "processing"
DONE = "done"
ERROR = "error"

DOCUMENT_STATUSES = frozenset({QUEUED, PROCESSING, DONE, ERROR})


@dataclass(frozen=True)
class RequestOptions:
    """
    Options that change how a single API request is made.

    Attributes:
        host: Hostname to send the request to instead of the configured API host
        http_method: HTTP verb to use instead of the one derived from the body
        raw_response: Return the body verbatim instead of decoding JSON
        timeout: Seconds to keep retrying rate-limited requests for; None or a
            non-positive value falls back to the client's retry timeout (60s)
        file: Binary stream to send as the ``file`` part of a multipart upload

    Example:
        >>> options = RequestOptions(http_method="DELETE", raw_response=True)
    """

    host: Optional[str] = None
    http_method: Optional[str] = None
    raw_response: bool = False
    timeout: Optional[int] = None
    file: Optional[BinaryIO] = None
