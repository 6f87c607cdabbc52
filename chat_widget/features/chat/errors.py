"""Errors raised while proxying a chat message."""


class ChatProxyError(Exception):
    """Base error carrying the HTTP status and the message shown to the visitor."""

    status_code: int = 500
    public_message: str = "Chat service is unavailable"

    def __init__(self, detail: str | None = None):
        super().__init__(detail or self.public_message)
        self.detail = detail


class ConfigurationError(ChatProxyError):
    """No webhook target is configured."""

    status_code = 500
    public_message = "Chat service is unavailable"


class ValidationError(ChatProxyError):
    """The inbound request itself is unacceptable."""

    status_code = 400


class ForbiddenError(ValidationError):
    """Missing, expired or forged anti-forgery token."""

    status_code = 403
    public_message = "Security check failed"


class BadRequestError(ValidationError):
    """Message empty after sanitizing."""

    status_code = 400
    public_message = "Message cannot be empty"


class UpstreamError(ChatProxyError):
    """The webhook could not produce a usable answer."""

    status_code = 500


class UpstreamTransportError(UpstreamError):
    public_message = "Failed to connect to chat service"


class UpstreamStatusError(UpstreamError):
    public_message = "Chat service returned an error"


class UpstreamFormatError(UpstreamError):
    public_message = "Invalid response from chat service"
