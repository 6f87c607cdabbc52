"""HTTP client for the automation webhook."""

from typing import Any

import httpx

DEFAULT_TIMEOUT = 30.0


class WebhookClient:
    """Wrapper around a shared httpx client used to reach the webhook.

    TLS certificates are always verified and redirects are not followed, so
    a message only ever goes to the configured URL.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.timeout = timeout
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            verify=True,
            follow_redirects=False,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    async def post_json(self, url: str, payload: dict[str, Any]) -> httpx.Response:
        """POST a JSON body and return the raw response.

        Raises:
            httpx.RequestError: On connection failures and timeouts
            httpx.InvalidURL: If the URL cannot be parsed
        """
        return await self._client.post(url, json=payload)

    async def aclose(self) -> None:
        await self._client.aclose()
