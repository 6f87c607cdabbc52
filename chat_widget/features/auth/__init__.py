"""Request authentication for the chat endpoint."""

from .nonce import CHAT_NONCE_ACTION, create_nonce, verify_nonce

__all__ = [
    "CHAT_NONCE_ACTION",
    "create_nonce",
    "verify_nonce",
]
