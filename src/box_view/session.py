"""
The Box View Session API: short-lived viewing sessions for one document.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any, Dict, Optional

from .base import Resource
from .core.utils import DateInput, encode_flag
from .document import Document
from .exceptions import INVALID_RESPONSE_ERROR
from .models import RequestOptions

if TYPE_CHECKING:
    from .client import BoxViewClient

PATH = "/sessions"
URL_KEYS = ("assets", "realtime", "view")


@dataclass
class Session(Resource):
    """A viewing session created for a document."""

    client: "BoxViewClient" = field(repr=False, compare=False)
    id: str
    document: Optional[Document] = None
    expires_at: Optional[datetime] = None
    urls: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, client: "BoxViewClient", data: Dict[str, Any]) -> "Session":
        if not isinstance(data, dict) or not data.get("id"):
            raise cls._error(INVALID_RESPONSE_ERROR, "Session response is missing an id.")
        session = cls(client=client, id=str(data["id"]))
        session._set_values(data)
        return session

    def _set_values(self, data: Dict[str, Any]) -> None:
        if isinstance(data.get("document"), dict):
            self.document = Document.from_payload(self.client, data["document"])

        expires_at = data.get("expires_at", data.get("expiresAt"))
        if expires_at is not None:
            self.expires_at = self._parse_date(expires_at)

        urls = data.get("urls")
        if isinstance(urls, dict):
            for key in URL_KEYS:
                if urls.get(key) is not None:
                    self.urls[key] = str(urls[key])

    @property
    def assets_url(self) -> Optional[str]:
        return self.urls.get("assets")

    @property
    def realtime_url(self) -> Optional[str]:
        return self.urls.get("realtime")

    @property
    def view_url(self) -> Optional[str]:
        return self.urls.get("view")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "document": self.document.to_dict() if self.document else None,
            "expires_at": self._date(self.expires_at) if self.expires_at else None,
            "urls": dict(self.urls),
        }

    def delete(self) -> bool:
        """Delete the session. True if the server answered with an empty body."""
        options = RequestOptions(http_method="DELETE", raw_response=True)
        response = self._request_raw(self.client, f"{PATH}/{self.id}", options=options)
        return response.text == ""

    @classmethod
    def create(
        cls,
        client: "BoxViewClient",
        document_id: str,
        duration: Optional[int] = None,
        expires_at: Optional[DateInput] = None,
        is_downloadable: Optional[bool] = None,
        is_text_selectable: Optional[bool] = None,
    ) -> "Session":
        """
        Create a session for a document that may expire.

        Args:
            client: The client to make requests from
            document_id: The document to create a session for
            duration: Minutes the session should last
            expires_at: When the session should expire
            is_downloadable: Allow downloading the original file
            is_text_selectable: Allow selecting text
        """
        if not document_id:
            raise ValueError("Document ID cannot be empty")

        body: Dict[str, str] = {"document_id": document_id}

        if duration is not None and duration > 0:
            body["duration"] = str(duration)
        if expires_at is not None:
            body["expires_at"] = cls._date(expires_at)
        if is_downloadable is not None:
            body["is_downloadable"] = encode_flag(is_downloadable)
        if is_text_selectable is not None:
            body["is_text_selectable"] = encode_flag(is_text_selectable)

        metadata = cls._request_json(client, PATH, body=body)
        return cls.from_payload(client, metadata)
