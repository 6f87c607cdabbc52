"""Cookie-backed visitor sessions."""

import re
import uuid
from dataclasses import dataclass

SESSION_MAX_AGE = 60 * 60

_UUID4 = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$"
)


@dataclass(frozen=True)
class SessionCookie:
    """A session cookie the response must set."""

    name: str
    value: str
    secure: bool
    max_age: int = SESSION_MAX_AGE
    path: str = "/"
    httponly: bool = True
    samesite: str = "strict"


def is_valid_session_id(value: str | None) -> bool:
    """True for a lowercase canonical UUID v4 string."""
    return bool(value) and _UUID4.match(value) is not None


def generate_session_id() -> str:
    """Generate a new session ID."""
    return str(uuid.uuid4())


def resolve_session(
    current: str | None,
    cookie_name: str,
    secure: bool,
) -> tuple[str, SessionCookie | None]:
    """
    Reuse the visitor's session or start a new one.

    Args:
        current: Session cookie value sent by the browser, if any
        cookie_name: Name of the session cookie
        secure: Whether the request arrived over TLS

    Returns:
        Tuple of (session_id, cookie_to_set). The cookie is None when the
        existing session was reused.
    """
    if is_valid_session_id(current):
        return current, None

    session_id = generate_session_id()
    return session_id, SessionCookie(name=cookie_name, value=session_id, secure=secure)
