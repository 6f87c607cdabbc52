"""Transports carrying widget messages to the chat backend."""

from typing import Any, Protocol

import httpx

DEFAULT_TIMEOUT = 30.0


class TransportError(Exception):
    """The exchange failed: connection, timeout, status or undecodable body."""


class ChatTransport(Protocol):
    async def send(self, message: str) -> dict[str, Any]: ...

    async def aclose(self) -> None: ...


def _decode(response: httpx.Response) -> dict[str, Any]:
    if not response.is_success:
        raise TransportError(f"HTTP {response.status_code}")
    try:
        data = response.json()
    except ValueError as e:
        raise TransportError("Response body is not JSON") from e
    # Non-object JSON carries no reply fields
    return data if isinstance(data, dict) else {}


class _ClientOwner:
    """Holds an httpx client, closing it only if it was created here."""

    def __init__(self, client: httpx.AsyncClient | None):
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=DEFAULT_TIMEOUT)

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()


class WebhookTransport(_ClientOwner):
    """Basic variant: POST JSON straight to the webhook from the page."""

    def __init__(self, url: str, client: httpx.AsyncClient | None = None):
        super().__init__(client)
        self.url = url

    async def send(self, message: str) -> dict[str, Any]:
        try:
            response = await self.client.post(self.url, json={"message": message})
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise TransportError(type(e).__name__) from e
        return _decode(response)


class ProxyTransport(_ClientOwner):
    """Hardened variant: form POST to the proxy endpoint with a nonce.

    The session lives in an HttpOnly cookie, so the client's cookie jar
    carries it and nothing here ever reads it.
    """

    def __init__(
        self,
        endpoint: str,
        nonce: str,
        client: httpx.AsyncClient | None = None,
    ):
        super().__init__(client)
        self.endpoint = endpoint
        self.nonce = nonce

    async def send(self, message: str) -> dict[str, Any]:
        try:
            response = await self.client.post(
                self.endpoint,
                data={"message": message, "nonce": self.nonce},
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise TransportError(type(e).__name__) from e
        return _decode(response)
