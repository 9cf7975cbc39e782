"""
Shared plumbing for the Box View API resources.
"""

from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional

from .core.utils import DateInput, parse_date, to_rfc3339
from .exceptions import BoxViewError
from .models import RequestOptions

if TYPE_CHECKING:
    from .client import BoxViewClient


class Resource:
    """Base class for the Document and Session resources."""

    client: "BoxViewClient"

    @staticmethod
    def _date(value: DateInput) -> str:
        """RFC 3339 timestamp for a date, datetime or date string."""
        return to_rfc3339(value)

    @staticmethod
    def _parse_date(value: Optional[DateInput]):
        if value is None:
            return None
        return parse_date(value)

    @staticmethod
    def _error(code: str, message: str) -> BoxViewError:
        return BoxViewError(message, code)

    @staticmethod
    def _request_json(
        client: "BoxViewClient",
        path: str,
        query: Optional[Mapping[str, Any]] = None,
        body: Optional[Mapping[str, Any]] = None,
        options: Optional[RequestOptions] = None,
    ) -> Dict[str, Any]:
        return client.request_executor.request_json(path, query, body, options)

    @staticmethod
    def _request_raw(
        client: "BoxViewClient",
        path: str,
        query: Optional[Mapping[str, Any]] = None,
        body: Optional[Mapping[str, Any]] = None,
        options: Optional[RequestOptions] = None,
    ):
        return client.request_executor.request_raw(path, query, body, options)
