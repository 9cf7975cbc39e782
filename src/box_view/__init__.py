"""
Box View SDK

Python client for the Box View document conversion and viewing API.
"""

from .client import BoxViewClient
from .config import Settings, get_settings, setup_logging
from .document import Document
from .exceptions import BoxViewError
from .models import DOCUMENT_STATUSES, RequestOptions
from .request import RequestExecutor, RetryBudget
from .session import Session

__version__ = "1.0.0"

__all__ = [
    "BoxViewClient",
    "Document",
    "Session",
    "BoxViewError",
    "RequestExecutor",
    "RequestOptions",
    "RetryBudget",
    "Settings",
    "get_settings",
    "setup_logging",
    "DOCUMENT_STATUSES",
]
