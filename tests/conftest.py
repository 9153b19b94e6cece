from __future__ import annotations

import json
from collections.abc import Callable

import httpx
import pytest

from fcm_client.config import Settings
from fcm_client.services.transport import GoogleRestTransport

# Environment variables read by Settings; cleared so the host environment
# never leaks into a test
_SETTINGS_ENV_VARS = (
    "FCM_CONFIG_PATH",
    "FCM_PROJECT_ID",
    "FCM_CREDENTIALS_FILE",
    "FCM_SCOPES",
    "FCM_FCM_BASE_URL",
    "FCM_IID_BASE_URL",
    "FCM_TIMEOUT_SECONDS",
    "FCM_VERIFY_TLS",
    "FCM_CA_BUNDLE",
    "FCM_LOG_LEVEL",
    "FCM_LOG_JSON",
    "GOOGLE_CLOUD_PROJECT",
    "GCP_PROJECT",
    "GOOGLE_APPLICATION_CREDENTIALS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove settings-related environment variables for every test."""
    for name in _SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class FakeTokenProvider:
    """Stands in for GoogleTokenProvider without touching google-auth."""

    def __init__(self, token: str = "test-access-token", project_id: str | None = None) -> None:
        self.token = token
        self.project_id = project_id
        self.calls = 0

    async def authorization_header(self) -> str:
        self.calls += 1
        return f"Bearer {self.token}"


class RecordingHandler:
    """
    httpx.MockTransport handler that records requests and replays a canned response.

    Set ``response`` to an httpx.Response, or ``error`` to an httpx exception
    to raise instead.
    """

    def __init__(self, status_code: int = 200, json_body: object | None = None) -> None:
        self.requests: list[httpx.Request] = []
        self.response = httpx.Response(status_code, json=json_body if json_body is not None else {})
        self.error: Exception | None = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.response

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    @property
    def last_json(self) -> object:
        return json.loads(self.last_request.content)


@pytest.fixture
def token_provider() -> FakeTokenProvider:
    return FakeTokenProvider()


@pytest.fixture
def recording_handler() -> RecordingHandler:
    return RecordingHandler()


@pytest.fixture
def make_transport(
    token_provider: FakeTokenProvider,
) -> Callable[[RecordingHandler], GoogleRestTransport]:
    """Build a GoogleRestTransport whose HTTP traffic goes to a RecordingHandler."""

    def _make(handler: RecordingHandler) -> GoogleRestTransport:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return GoogleRestTransport(http_client, token_provider)  # type: ignore[arg-type]

    return _make


@pytest.fixture
def settings() -> Settings:
    return Settings(project_id="test-project")
