"""Shared fixtures: settings, a scriptable fake webhook and an app client."""

import json

import httpx
import pytest
from fastapi.testclient import TestClient

from chat_widget.config import Settings
from chat_widget.core.rate_limiter import limiter
from chat_widget.core.webhook import WebhookClient
from chat_widget.features.auth import create_nonce
from chat_widget.features.chat.service import ChatProxyHandler, get_chat_proxy
from chat_widget.main import create_app

NONCE_SECRET = "test-nonce-secret-0123456789-abcdefghij"
WEBHOOK_URL = "https://hooks.example.com/webhook/chat?token=s3cr3t"


class FakeWebhook:
    """httpx MockTransport handler that records requests.

    Set ``responder`` to change the reply; it receives the request and
    returns an ``httpx.Response`` or raises an httpx error.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.responder = lambda request: httpx.Response(200, json={"response": "Hi"})

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    @property
    def payloads(self) -> list[dict]:
        return [json.loads(r.content) for r in self.requests]


@pytest.fixture(autouse=True)
def reset_rate_limits():
    limiter.reset()
    yield


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        webhook_url=WEBHOOK_URL,
        nonce_secret=NONCE_SECRET,
        site_name="Example Site",
    )


@pytest.fixture
def webhook() -> FakeWebhook:
    return FakeWebhook()


def build_proxy(settings: Settings, webhook: FakeWebhook) -> ChatProxyHandler:
    return ChatProxyHandler(
        settings=settings,
        webhook=WebhookClient(transport=httpx.MockTransport(webhook)),
    )


def build_app(settings: Settings, webhook: FakeWebhook):
    app = create_app(settings)
    proxy = build_proxy(settings, webhook)
    app.dependency_overrides[get_chat_proxy] = lambda: proxy
    return app


@pytest.fixture
def proxy(settings, webhook) -> ChatProxyHandler:
    return build_proxy(settings, webhook)


@pytest.fixture
def app(settings, webhook):
    return build_app(settings, webhook)


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def nonce(settings) -> str:
    return create_nonce(settings.nonce_secret)


@pytest.fixture
def make_client(webhook):
    """Client for an app built from custom settings, sharing the fake webhook."""

    def _make(settings: Settings, base_url: str = "http://testserver") -> TestClient:
        return TestClient(build_app(settings, webhook), base_url=base_url)

    return _make
