"""
Top-level client for the Box View API.
"""

import threading
from typing import Iterable, List, Optional, Union

from .config import Settings, get_logger, get_settings
from .core.utils import DateInput
from .document import Document, UploadSource
from .request import RequestExecutor
from .session import Session


class BoxViewClient:
    """
    Entry point for the Box View API.

    Examples:
        >>> client = BoxViewClient("your-api-key")
        >>> document = client.upload("https://example.com/report.pdf", name="Report")
        >>> session = client.create_session(document.id, duration=10)
        >>> print(session.view_url)

        Reading the key from BOX_VIEW_API_KEY:
        >>> with BoxViewClient() as client:
        ...     documents = client.find_documents(limit=10)
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        settings: Optional[Settings] = None,
    ):
        """
        Args:
            api_key: Box View API key; defaults to the BOX_VIEW_API_KEY setting
            settings: SDK settings; read from the environment when omitted

        Raises:
            ValueError: If no API key is given or configured
        """
        self.settings = settings or get_settings()
        self.api_key = api_key or self.settings.api_key
        if not self.api_key:
            raise ValueError("An API key is required (pass api_key or set BOX_VIEW_API_KEY)")

        if self.settings.debug:
            self.settings.setup_logging()

        self.logger = get_logger("client")
        self._request_executor: Optional[RequestExecutor] = None
        self._executor_lock = threading.Lock()

    @property
    def request_executor(self) -> RequestExecutor:
        executor = self._request_executor
        if executor is not None:
            return executor

        with self._executor_lock:
            if self._request_executor is None:
                self._request_executor = RequestExecutor(self.api_key, self.settings)
            return self._request_executor

    @request_executor.setter
    def request_executor(self, executor: RequestExecutor) -> None:
        with self._executor_lock:
            self._request_executor = executor

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self) -> None:
        with self._executor_lock:
            executor, self._request_executor = self._request_executor, None
        if executor is not None:
            executor.close()

    def find_documents(
        self,
        limit: Optional[int] = None,
        created_before: Optional[DateInput] = None,
        created_after: Optional[DateInput] = None,
    ) -> List[Document]:
        """Get a list of documents that meet the provided criteria."""
        return Document.find(
            self, limit=limit, created_before=created_before, created_after=created_after
        )

    def get_document(self, document_id: str) -> Document:
        return Document.get(self, document_id)

    def upload(
        self,
        source: UploadSource,
        name: Optional[str] = None,
        thumbnails: Optional[Union[str, Iterable[str]]] = None,
        non_svg: Optional[bool] = None,
    ) -> Document:
        """Upload a document from a URL, a local path or an open binary file."""
        return Document.upload(
            self, source, name=name, thumbnails=thumbnails, non_svg=non_svg
        )

    def create_session(
        self,
        document_id: str,
        duration: Optional[int] = None,
        expires_at: Optional[DateInput] = None,
        is_downloadable: Optional[bool] = None,
        is_text_selectable: Optional[bool] = None,
    ) -> Session:
        """Create a viewing session for a document."""
        return Session.create(
            self,
            document_id,
            duration=duration,
            expires_at=expires_at,
            is_downloadable=is_downloadable,
            is_text_selectable=is_text_selectable,
        )
