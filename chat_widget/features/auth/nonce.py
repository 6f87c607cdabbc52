"""Anti-forgery tokens for the widget's chat endpoint."""

import secrets
from datetime import datetime, timedelta, timezone

import jwt

CHAT_NONCE_ACTION = "chat_widget_message"


def create_nonce(
    secret: str,
    action: str = CHAT_NONCE_ACTION,
    ttl_seconds: int = 12 * 60 * 60,
) -> str:
    """
    Create a signed, short-lived token bound to a single action.

    Args:
        secret: Server-side signing secret
        action: Action the token authorizes
        ttl_seconds: Lifetime of the token

    Returns:
        Signed JWT token string
    """
    now = datetime.now(timezone.utc)
    payload = {
        "action": action,
        "jti": secrets.token_urlsafe(8),
        "iat": now,
        "exp": now + timedelta(seconds=ttl_seconds),
    }
    return jwt.encode(payload, secret, algorithm="HS256")


def verify_nonce(token: str | None, secret: str, action: str = CHAT_NONCE_ACTION) -> bool:
    """
    Check that a token was issued by us, is unexpired and matches the action.

    Never raises; any decoding problem counts as a failed check.
    """
    if not token:
        return False

    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=["HS256"],
            options={"require": ["exp", "iat"]},
        )
    except jwt.InvalidTokenError:
        return False

    return payload.get("action") == action
