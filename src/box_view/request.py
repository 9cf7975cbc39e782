"""
HTTP request layer shared by every Box View resource.
"""

import io
import json
import os
import time
from dataclasses import dataclass, field, replace
from typing import Any, BinaryIO, Callable, Dict, Mapping, Optional

import httpx

from .config import Settings, get_logger, get_settings
from .core.remote import (
    build_auth_headers,
    build_uri,
    clean_params,
    extract_error_message,
    format_error_message,
    map_status_code_to_error,
    resolve_method,
    resolve_timeout,
)
from .core.utils import parse_retry_after
from .exceptions import (
    HTTP_CLIENT_ERROR,
    JSON_RESPONSE_ERROR,
    REQUEST_TIMEOUT_ERROR,
    SERVER_ERROR,
    BoxViewError,
)
from .models import RequestOptions


class RetryBudget:
    """
    Wall-clock budget for the attempts of one logical request.

    The clock starts when the budget is created. ``wait`` always sleeps for
    exactly the requested number of seconds.
    """

    def __init__(
        self,
        timeout: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.timeout = timeout
        self._clock = clock
        self._sleep = sleep
        self._started = clock()

    @property
    def elapsed(self) -> float:
        return self._clock() - self._started

    @property
    def exhausted(self) -> bool:
        return self.elapsed >= self.timeout

    def wait(self, seconds: float) -> None:
        self._sleep(seconds)


@dataclass
class PreparedRequest:
    """Everything needed to send, and resend, one request."""

    method: str
    url: str
    headers: Dict[str, str]
    query: Dict[str, str] = field(default_factory=dict)
    body: Dict[str, str] = field(default_factory=dict)
    file: Optional[BinaryIO] = None
    filename: str = "file"
    file_position: Optional[int] = None

    def describe_body(self) -> str:
        if self.method != "POST":
            return ""
        if self.file is not None:
            return json.dumps({**self.body, "file": self.filename})
        return json.dumps(self.body) if self.body else ""


class RequestExecutor:
    """
    Makes requests to the Box View API.

    Builds the URI, headers and body for a call, sends it with httpx, and
    resends it for as long as the server answers with a Retry-After header
    and the call's retry timeout has not run out.

    Example:
        >>> with RequestExecutor("your-api-key") as executor:
        ...     payload = executor.request_json("/documents", query={"limit": "10"})
    """

    def __init__(
        self,
        api_key: str,
        settings: Optional[Settings] = None,
        http_client: Optional[httpx.Client] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.settings = settings or get_settings()
        self._api_key = api_key
        self._client = http_client or httpx.Client(
            timeout=httpx.Timeout(self.settings.http_timeout)
        )
        self._clock = clock
        self._sleep = sleep
        self.logger = get_logger("request")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self) -> None:
        self._client.close()

    def request_json(
        self,
        path: str,
        query: Optional[Mapping[str, Any]] = None,
        body: Optional[Mapping[str, Any]] = None,
        options: Optional[RequestOptions] = None,
    ) -> Dict[str, Any]:
        """Send a request and return the decoded JSON object."""
        prepared, response = self._execute(path, query, body, options or RequestOptions())
        return self._handle_json_response(prepared, response)

    def request_raw(
        self,
        path: str,
        query: Optional[Mapping[str, Any]] = None,
        body: Optional[Mapping[str, Any]] = None,
        options: Optional[RequestOptions] = None,
    ) -> httpx.Response:
        """Send a request and return the response without decoding the body."""
        options = replace(options or RequestOptions(), raw_response=True)
        _, response = self._execute(path, query, body, options)
        return response

    def prepare(
        self,
        path: str,
        query: Optional[Mapping[str, Any]] = None,
        body: Optional[Mapping[str, Any]] = None,
        options: Optional[RequestOptions] = None,
    ) -> PreparedRequest:
        """Build the request for a call without sending it."""
        options = options or RequestOptions()
        query = clean_params(query)
        body = clean_params(body)

        host = options.host or self.settings.host
        prepared = PreparedRequest(
            method=resolve_method(options.http_method, options.file is not None, body),
            url=build_uri(host, self.settings.base_path, path, query),
            headers=build_auth_headers(self._api_key, options.raw_response),
            query=query,
            body=body,
        )

        if options.file is not None:
            prepared.filename = _stream_name(options.file)
            position = _stream_position(options.file)
            if position is None:
                # Buffered once; every send starts from offset 0.
                prepared.file = io.BytesIO(options.file.read())
                prepared.file_position = 0
            else:
                prepared.file = options.file
                prepared.file_position = position

        return prepared

    def _execute(
        self,
        path: str,
        query: Optional[Mapping[str, Any]],
        body: Optional[Mapping[str, Any]],
        options: RequestOptions,
    ):
        prepared = self.prepare(path, query, body, options)
        budget = RetryBudget(
            resolve_timeout(options.timeout, self.settings.retry_timeout),
            clock=self._clock,
            sleep=self._sleep,
        )

        while True:
            response = self._send(prepared)
            delay = parse_retry_after(response.headers.get("Retry-After"))
            if delay is None:
                break

            if budget.exhausted:
                message = (
                    "The request timed out after retrying for "
                    f"{int(budget.elapsed)} seconds."
                )
                raise self._error(REQUEST_TIMEOUT_ERROR, message, prepared, response)

            self.logger.info(
                "Rate limited on %s %s, retrying in %s seconds",
                prepared.method,
                prepared.url,
                delay,
            )
            budget.wait(delay)

        self._handle_request_error(prepared, response)
        return prepared, response

    def _send(self, prepared: PreparedRequest) -> httpx.Response:
        kwargs: Dict[str, Any] = {"headers": prepared.headers}

        if prepared.file is not None:
            if prepared.file_position is not None:
                prepared.file.seek(prepared.file_position)
            kwargs["data"] = prepared.body
            kwargs["files"] = {"file": (prepared.filename, prepared.file)}
        elif prepared.body:
            kwargs["json"] = prepared.body

        self.logger.debug("%s %s", prepared.method, prepared.url)

        try:
            return self._client.request(prepared.method, prepared.url, **kwargs)
        except httpx.HTTPError as e:
            raise self._error(
                HTTP_CLIENT_ERROR, str(e) or type(e).__name__, prepared
            ) from e

    def _handle_request_error(
        self, prepared: PreparedRequest, response: httpx.Response
    ) -> None:
        code = map_status_code_to_error(response.status_code)
        if code is None:
            return
        raise self._error(code, f"HTTP {response.status_code}", prepared, response)

    def _handle_json_response(
        self, prepared: PreparedRequest, response: httpx.Response
    ) -> Dict[str, Any]:
        try:
            payload = response.json()
        except ValueError:
            payload = None

        if not isinstance(payload, dict):
            raise self._error(
                JSON_RESPONSE_ERROR,
                "Server response is not a valid JSON object.",
                prepared,
                response,
            )

        message = extract_error_message(payload)
        if message is not None:
            raise self._error(SERVER_ERROR, message, prepared, response)

        return payload

    def _error(
        self,
        code: str,
        message: Optional[str],
        prepared: Optional[PreparedRequest] = None,
        response: Optional[httpx.Response] = None,
    ) -> BoxViewError:
        details: Dict[str, Any] = {}
        context: Dict[str, Any] = {}

        if prepared is not None:
            details.update(method=prepared.method, url=prepared.url)
            context.update(
                method=prepared.method,
                url=prepared.url,
                query=httpx.URL(prepared.url).query.decode("ascii"),
                headers=prepared.headers,
                request_body=prepared.describe_body(),
            )

        if response is not None:
            details["status_code"] = response.status_code
            context["response_body"] = _response_text(response)

        self.logger.warning("Box View request failed (%s): %s", code, message)
        return BoxViewError(format_error_message(message, **context), code, details)


def _stream_name(stream: BinaryIO) -> str:
    name = getattr(stream, "name", None)
    if isinstance(name, (str, bytes, os.PathLike)):
        return os.path.basename(os.fsdecode(name)) or "file"
    return "file"


def _stream_position(stream: BinaryIO) -> Optional[int]:
    try:
        if not stream.seekable():
            return None
        return stream.tell()
    except (AttributeError, OSError, ValueError):
        return None


def _response_text(response: httpx.Response) -> str:
    try:
        return response.text
    except (httpx.ResponseNotRead, UnicodeDecodeError):
        return ""
