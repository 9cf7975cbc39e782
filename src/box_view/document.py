"""
The Box View Document API: uploading, checking status, downloading and
deleting documents.
"""

import os
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any, BinaryIO, Dict, Iterable, List, Optional, Union

from .base import Resource
from .config import get_logger
from .core.utils import DateInput, encode_flag, join_thumbnails
from .exceptions import INVALID_FILE_ERROR, INVALID_RESPONSE_ERROR
from .models import RequestOptions

if TYPE_CHECKING:
    from .client import BoxViewClient
    from .session import Session

PATH = "/documents"
GET_FIELDS = ("id", "created_at", "name", "status")

UploadSource = Union[str, os.PathLike, BinaryIO]

logger = get_logger("document")


@dataclass
class Document(Resource):
    """
    A document uploaded to Box View.

    Attributes:
        client: The client used to make requests for this document
        id: The server-assigned document ID
        name: The document title
        status: One of "queued", "processing", "done" or "error"
        created_at: When the document was created, in UTC
    """

    client: "BoxViewClient" = field(repr=False, compare=False)
    id: str
    name: Optional[str] = None
    status: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_payload(cls, client: "BoxViewClient", data: Dict[str, Any]) -> "Document":
        """Build a document from a decoded API response."""
        if not isinstance(data, dict) or not data.get("id"):
            raise cls._error(INVALID_RESPONSE_ERROR, "Document response is missing an id.")
        document = cls(client=client, id=str(data["id"]))
        document._set_values(data)
        return document

    def _set_values(self, data: Dict[str, Any]) -> None:
        created_at = data.get("created_at", data.get("createdAt"))
        if created_at is not None:
            self.created_at = self._parse_date(created_at)
        if data.get("name") is not None:
            self.name = str(data["name"])
        if data.get("status") is not None:
            self.status = str(data["status"])

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "status": self.status,
            "created_at": self._date(self.created_at) if self.created_at else None,
        }

    @property
    def _path(self) -> str:
        return f"{PATH}/{self.id}"

    def create_session(
        self,
        duration: Optional[int] = None,
        expires_at: Optional[DateInput] = None,
        is_downloadable: Optional[bool] = None,
        is_text_selectable: Optional[bool] = None,
    ) -> "Session":
        """Create a viewing session for this document."""
        from .session import Session

        return Session.create(
            self.client,
            self.id,
            duration=duration,
            expires_at=expires_at,
            is_downloadable=is_downloadable,
            is_text_selectable=is_text_selectable,
        )

    def delete(self) -> bool:
        """
        Delete the document.

        Returns:
            True if the server answered with an empty body. The status code is
            not consulted beyond the usual error mapping.
        """
        options = RequestOptions(http_method="DELETE", raw_response=True)
        response = self._request_raw(self.client, self._path, options=options)
        return response.text == ""

    def download(self, extension: Optional[str] = None) -> bytes:
        """
        Download the document's content.

        Args:
            extension: "pdf" or "zip" for converted output; None for the
                original file
        """
        suffix = f".{extension.lstrip('.')}" if extension else ""
        response = self._request_raw(self.client, f"{self._path}/content{suffix}")
        return response.content

    def thumbnail(self, width: int, height: int) -> bytes:
        """Download a thumbnail of the first page at the given pixel size."""
        if width <= 0 or height <= 0:
            raise ValueError("Thumbnail width and height must be positive")

        query = {"height": str(height), "width": str(width)}
        response = self._request_raw(self.client, f"{self._path}/thumbnail", query=query)
        return response.content

    def update(self, name: str) -> bool:
        """Rename the document and refresh local fields from the response."""
        metadata = self._request_json(
            self.client,
            self._path,
            body={"name": name},
            options=RequestOptions(http_method="PUT"),
        )
        self._set_values(metadata)
        return True

    @classmethod
    def find(
        cls,
        client: "BoxViewClient",
        limit: Optional[int] = None,
        created_before: Optional[DateInput] = None,
        created_after: Optional[DateInput] = None,
    ) -> List["Document"]:
        """
        List documents matching the given criteria.

        Raises:
            BoxViewError: ``invalid_response`` if the response has no
                ``document_collection.entries``
        """
        query: Dict[str, str] = {}

        if limit is not None and limit > 0:
            query["limit"] = str(limit)
        if created_before is not None:
            query["created_before"] = cls._date(created_before)
        if created_after is not None:
            query["created_after"] = cls._date(created_after)

        response = cls._request_json(client, PATH, query=query)

        collection = response.get("document_collection")
        if not isinstance(collection, dict) or not isinstance(
            collection.get("entries"), list
        ):
            raise cls._error(INVALID_RESPONSE_ERROR, "response is not in a valid format.")

        return [cls.from_payload(client, entry) for entry in collection["entries"]]

    @classmethod
    def get(cls, client: "BoxViewClient", document_id: str) -> "Document":
        """Fetch a document's metadata by ID."""
        if not document_id:
            raise ValueError("Document ID cannot be empty")

        metadata = cls._request_json(
            client, f"{PATH}/{document_id}", query={"fields": ",".join(GET_FIELDS)}
        )
        return cls.from_payload(client, metadata)

    @classmethod
    def upload(
        cls,
        client: "BoxViewClient",
        source: UploadSource,
        name: Optional[str] = None,
        thumbnails: Optional[Union[str, Iterable[str]]] = None,
        non_svg: Optional[bool] = None,
    ) -> "Document":
        """
        Upload a document from a URL, a local path or an open binary file.

        Strings starting with ``http://`` or ``https://`` are uploaded by URL.
        Other strings and path objects are opened from disk. Local files are
        sent as multipart uploads to the upload host.

        Args:
            source: URL, path or binary stream
            name: Override the document name
            thumbnails: Sizes like ``["100x100", "200x200"]`` or a
                comma-separated string
            non_svg: Also create a version that does not use SVG

        Raises:
            BoxViewError: ``invalid_file`` if the source cannot be read
        """
        body: Dict[str, str] = {}
        if name is not None:
            body["name"] = name
        if thumbnails is not None:
            body["thumbnails"] = join_thumbnails(thumbnails)
        if non_svg is not None:
            body["non_svg"] = encode_flag(non_svg)

        if isinstance(source, str) and source.startswith(("http://", "https://")):
            body["url"] = source
            return cls._upload(client, body)

        if isinstance(source, (str, os.PathLike)):
            try:
                stream = open(source, "rb")
            except OSError as e:
                raise cls._error(INVALID_FILE_ERROR, f"Cannot read file {source}: {e}") from e
            with stream:
                return cls._upload_file(client, stream, body)

        if hasattr(source, "read"):
            return cls._upload_file(client, source, body)

        raise cls._error(
            INVALID_FILE_ERROR,
            f"Expected a URL, path or binary file, got {type(source).__name__}",
        )

    @classmethod
    def _upload_file(
        cls, client: "BoxViewClient", stream: BinaryIO, body: Dict[str, str]
    ) -> "Document":
        options = RequestOptions(file=stream, host=client.settings.upload_host)
        return cls._upload(client, body, options)

    @classmethod
    def _upload(
        cls,
        client: "BoxViewClient",
        body: Dict[str, str],
        options: Optional[RequestOptions] = None,
    ) -> "Document":
        metadata = cls._request_json(client, PATH, body=body, options=options)
        document = cls.from_payload(client, metadata)
        logger.info("Uploaded document %s (%s)", document.id, document.status)
        return document
