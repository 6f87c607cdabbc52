"""Pydantic models for the chat proxy."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .session import SessionCookie


class WebhookRequest(BaseModel):
    """Body forwarded to the automation webhook."""

    model_config = ConfigDict(populate_by_name=True)

    message: str
    session_id: str = Field(..., alias="sessionId")


class ErrorResponse(BaseModel):
    """Generic failure body returned to the widget."""

    message: str


class ProxyResult(BaseModel):
    """Outcome of a proxied chat message, ready to become an HTTP response."""

    status_code: int
    body: dict[str, Any]
    session_cookie: SessionCookie | None = None

    @property
    def ok(self) -> bool:
        return self.status_code == 200
