"""Rate limiting configuration for API endpoints."""

from contextvars import ContextVar

from fastapi import Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from chat_widget.config import get_settings

# slowapi calls limit providers without the request, so the serving app's
# limit is published here for the duration of each request
_chat_limit_per_minute: ContextVar[int | None] = ContextVar(
    "chat_limit_per_minute", default=None
)


def get_rate_limit_key(request: Request) -> str:
    """Get composite key: prefix chat endpoints so they get their own bucket."""
    ip = get_remote_address(request)

    if request.url.path.startswith("/api/chat/"):
        return f"chat:{ip}"

    return ip


async def use_app_rate_limit(request: Request) -> None:
    """Route dependency: take the chat limit from the serving app's settings."""
    settings = getattr(request.app.state, "settings", None) or get_settings()
    _chat_limit_per_minute.set(settings.rate_limit_per_minute)


def chat_rate_limit() -> str:
    """Per-minute limit for the chat proxy."""
    per_minute = _chat_limit_per_minute.get()
    if per_minute is None:
        per_minute = get_settings().rate_limit_per_minute
    return f"{per_minute}/minute"


limiter = Limiter(key_func=get_rate_limit_key)
