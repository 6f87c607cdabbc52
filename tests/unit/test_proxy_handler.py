"""ChatProxyHandler tests, without the HTTP layer."""

import httpx
import pytest

from chat_widget.core.webhook import DEFAULT_TIMEOUT, WebhookClient
from chat_widget.features.chat.session import is_valid_session_id


class TestChatProxyHandler:
    @pytest.mark.asyncio
    async def test_new_session_returns_cookie(self, proxy, nonce):
        result = await proxy.handle("Hello", session_id=None, nonce=nonce)

        assert result.ok
        assert result.session_cookie is not None
        assert result.session_cookie.name == "example_site_chat_session"
        assert is_valid_session_id(result.session_cookie.value)
        assert result.session_cookie.secure is False

    @pytest.mark.asyncio
    async def test_existing_session_is_forwarded(self, proxy, nonce, webhook):
        session_id = "0b6f3c9e-6a52-4c1d-9d0e-8c3f3f1f2a11"

        result = await proxy.handle("Hello", session_id=session_id, nonce=nonce)

        assert result.session_cookie is None
        assert webhook.payloads[0]["sessionId"] == session_id

    @pytest.mark.asyncio
    async def test_secure_flag_follows_tls(self, proxy, nonce):
        result = await proxy.handle("Hello", session_id=None, nonce=nonce, secure=True)

        assert result.session_cookie.secure is True

    @pytest.mark.asyncio
    async def test_nonce_checked_before_anything_else(self, proxy, webhook):
        result = await proxy.handle("", session_id=None, nonce=None)

        assert result.status_code == 403
        assert result.session_cookie is None
        assert webhook.requests == []

    @pytest.mark.asyncio
    async def test_session_issued_even_for_empty_message(self, proxy, nonce):
        result = await proxy.handle("\x00 \n", session_id=None, nonce=nonce)

        assert result.status_code == 400
        assert result.session_cookie is not None

    @pytest.mark.asyncio
    async def test_output_field_relayed(self, proxy, nonce, webhook):
        webhook.responder = lambda request: httpx.Response(200, json={"output": "Hi"})

        result = await proxy.handle("Hello", session_id=None, nonce=nonce)

        assert result.body == {"output": "Hi"}

    @pytest.mark.asyncio
    async def test_non_object_json_is_format_error(self, proxy, nonce, webhook):
        webhook.responder = lambda request: httpx.Response(200, json=["Hi"])

        result = await proxy.handle("Hello", session_id=None, nonce=nonce)

        assert result.status_code == 500
        assert result.body == {"message": "Invalid response from chat service"}

    @pytest.mark.asyncio
    async def test_redirect_is_not_followed(self, proxy, nonce, webhook):
        webhook.responder = lambda request: httpx.Response(
            302, headers={"location": "https://elsewhere.example.net/"}
        )

        result = await proxy.handle("Hello", session_id=None, nonce=nonce)

        assert result.status_code == 500
        assert result.body == {"message": "Chat service returned an error"}
        assert len(webhook.requests) == 1


def test_webhook_client_defaults():
    client = WebhookClient()

    assert DEFAULT_TIMEOUT == 30.0
    assert client._client.timeout.read == 30.0
    assert client._client.timeout.connect == 30.0
    assert client._client.follow_redirects is False
