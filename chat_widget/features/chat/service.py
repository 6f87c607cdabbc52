"""Session-aware proxy between the widget and the automation webhook."""

import json
import logging
import math
from typing import Any

import httpx
from fastapi import Request

from chat_widget.config import Settings
from chat_widget.core.webhook import WebhookClient
from chat_widget.features.auth import create_nonce, verify_nonce
from chat_widget.features.widget.models import WidgetConfig

from .errors import (
    BadRequestError,
    ChatProxyError,
    ConfigurationError,
    ForbiddenError,
    UpstreamFormatError,
    UpstreamStatusError,
    UpstreamTransportError,
)
from .models import ProxyResult, WebhookRequest
from .sanitizer import clean_message, fingerprint_body, redact_url
from .session import SessionCookie, resolve_session

logger = logging.getLogger(__name__)


class ChatProxyHandler:
    """Forward visitor messages to the webhook under a cookie-backed session."""

    def __init__(self, settings: Settings, webhook: WebhookClient):
        self.settings = settings
        self.webhook = webhook

    @property
    def cookie_name(self) -> str:
        return self.settings.session_cookie_name

    def widget_config(self, proxy_url: str) -> WidgetConfig:
        """Widget config for one page load, with the proxy URL and a fresh nonce."""
        return self.settings.widget.model_copy(
            update={
                "proxy_url": proxy_url,
                "nonce": create_nonce(
                    self.settings.nonce_secret,
                    ttl_seconds=self.settings.nonce_ttl_seconds,
                ),
            }
        )

    async def handle(
        self,
        message: str | None,
        session_id: str | None,
        nonce: str | None,
        secure: bool = False,
    ) -> ProxyResult:
        """
        Process one chat message.

        Args:
            message: Raw message text from the form
            session_id: Value of the session cookie, if the browser sent one
            nonce: Anti-forgery token from the form
            secure: Whether the request arrived over TLS

        Returns:
            Result with status, JSON body and an optional cookie to set.
            Errors are never raised; they become generic error bodies.
        """
        cookie: SessionCookie | None = None
        try:
            if not verify_nonce(nonce, self.settings.nonce_secret):
                raise ForbiddenError()

            webhook_url = self.settings.webhook_url.strip()
            if not webhook_url:
                logger.error("Chat proxy misconfigured: webhook URL is not set")
                raise ConfigurationError("webhook URL is not set")

            session_id, cookie = resolve_session(session_id, self.cookie_name, secure)

            text = clean_message(message)
            if not text:
                raise BadRequestError()

            payload = await self.forward(webhook_url, text, session_id)
        except ChatProxyError as e:
            return ProxyResult(
                status_code=e.status_code,
                body={"message": e.public_message},
                session_cookie=cookie,
            )

        return ProxyResult(status_code=200, body=payload, session_cookie=cookie)

    async def forward(self, url: str, message: str, session_id: str) -> dict[str, Any]:
        """
        POST the message to the webhook and return its parsed JSON object.

        Raises:
            UpstreamTransportError: Connection failure or timeout
            UpstreamStatusError: Non-200 status from the webhook
            UpstreamFormatError: Body is not a JSON object
        """
        safe_url = redact_url(url)
        body = WebhookRequest(message=message, session_id=session_id)

        try:
            response = await self.webhook.post_json(url, body.model_dump(by_alias=True))
        except (httpx.RequestError, httpx.InvalidURL) as e:
            logger.error(
                "Webhook request failed: url=%s error=%s",
                safe_url,
                type(e).__name__,
            )
            raise UpstreamTransportError(type(e).__name__) from e

        fingerprint = fingerprint_body(
            response.content, response.headers.get("content-type")
        )

        if response.status_code != 200:
            logger.error(
                "Webhook returned non-200 status: url=%s status=%d content_type=%s "
                "length=%d checksum=%s timestamp=%s",
                safe_url,
                response.status_code,
                fingerprint.content_type,
                fingerprint.length,
                fingerprint.checksum,
                fingerprint.received_at,
            )
            raise UpstreamStatusError(f"status {response.status_code}")

        try:
            data = json.loads(
                response.content,
                parse_constant=_reject_constant,
                parse_float=_finite_float,
            )
        except (ValueError, RecursionError):
            data = None

        if not isinstance(data, dict):
            logger.error(
                "Webhook returned malformed JSON: url=%s hash=%s length=%d content_type=%s",
                safe_url,
                fingerprint.short_checksum,
                fingerprint.length,
                fingerprint.content_type,
            )
            raise UpstreamFormatError("response is not a JSON object")

        # The cookie owns the session; the webhook may not rotate it
        data.pop("sessionId", None)

        return data


def _reject_constant(name: str) -> float:
    # NaN and Infinity parse in Python but cannot be relayed as JSON
    raise ValueError(f"non-standard JSON constant {name}")


def _finite_float(value: str) -> float:
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"number out of range: {value}")
    return number


def get_chat_proxy(request: Request) -> ChatProxyHandler:
    """Get the proxy handler built at application start-up."""
    return request.app.state.chat_proxy
