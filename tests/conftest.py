import os

# Must be set before the app (and its limiter) is imported
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ.setdefault("PG_ACCESS", "")
os.environ.setdefault("PG_SECRET", "")

import httpx
import pytest
from fastapi.testclient import TestClient

from shared.config.settings import Credential, Settings, get_settings
from services.payment_proxy.dependencies import get_http_client
from services.payment_proxy.main import proxy_app

CREDENTIAL = Credential(access_id="ak_test_123", secret="sk_test_456")


class FakeGateway:
    """Stands in for api.zwitch.io behind an httpx.MockTransport."""

    def __init__(self):
        self.calls: list[httpx.Request] = []
        self.responder = lambda request: httpx.Response(201, json={"id": "pt_abc123"})

    def respond_with(self, status_code: int, **kwargs):
        self.responder = lambda request: httpx.Response(status_code, **kwargs)

    def fail_with(self, exc_type=httpx.ConnectError, message: str = "connection refused"):
        def _raise(request):
            raise exc_type(message, request=request)
        self.responder = _raise

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        return self.responder(request)


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def http_client(gateway):
    return httpx.AsyncClient(transport=httpx.MockTransport(gateway))


@pytest.fixture
def log_path(tmp_path):
    return tmp_path / "payment_token.json"


@pytest.fixture
def settings(log_path) -> Settings:
    return Settings(credential=CREDENTIAL, payment_token_log=log_path, rate_limit_enabled=False)


@pytest.fixture
def make_client(gateway):
    """Builds a TestClient wired to the fake gateway and the given settings."""
    opened = []

    def _make(app_settings: Settings) -> TestClient:
        async def _http_client():
            async with httpx.AsyncClient(transport=httpx.MockTransport(gateway)) as client:
                yield client

        proxy_app.dependency_overrides[get_settings] = lambda: app_settings
        proxy_app.dependency_overrides[get_http_client] = _http_client
        client = TestClient(proxy_app)
        client.__enter__()
        opened.append(client)
        return client

    yield _make

    for client in opened:
        client.__exit__(None, None, None)
    proxy_app.dependency_overrides.clear()


@pytest.fixture
def client(make_client, settings) -> TestClient:
    return make_client(settings)
