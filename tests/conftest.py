import pytest

from box_view.client import BoxViewClient
from box_view.config import Settings
from box_view.request import RequestExecutor
from tests.helpers.network import FakeClock, mock_http_client


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for name in (
        "BOX_VIEW_API_KEY",
        "BOX_VIEW_HOST",
        "BOX_VIEW_UPLOAD_HOST",
        "BOX_VIEW_BASE_PATH",
        "BOX_VIEW_RETRY_TIMEOUT",
        "BOX_VIEW_HTTP_TIMEOUT",
        "BOX_VIEW_DEBUG",
        "BOX_VIEW_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings():
    return Settings(api_key="test-key", _env_file=None)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def http_client():
    return mock_http_client()


@pytest.fixture
def executor(settings, http_client, clock):
    return RequestExecutor(
        "test-key", settings, http_client=http_client, clock=clock, sleep=clock.sleep
    )


@pytest.fixture
def client(settings, executor):
    client = BoxViewClient(settings=settings)
    client.request_executor = executor
    return client
