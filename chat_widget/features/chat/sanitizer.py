"""Inbound message cleanup and log-safe descriptions of webhook traffic."""

import hashlib
import re
import warnings
from dataclasses import dataclass
from datetime import datetime, timezone
from urllib.parse import urlsplit, urlunsplit

from bs4 import BeautifulSoup, MarkupResemblesLocatorWarning

REDACTED = "[REDACTED]"

# C0 controls except tab and newline, plus DEL
_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b-\x1f\x7f]")


@dataclass(frozen=True)
class BodyFingerprint:
    """Metadata describing a response body without revealing it."""

    length: int
    checksum: str
    content_type: str
    received_at: str

    @property
    def short_checksum(self) -> str:
        return self.checksum[:16]


def clean_message(message: str | None) -> str:
    """Strip markup and control characters from a visitor message.

    Returns an empty string when nothing printable is left.
    """
    if not message:
        return ""

    with warnings.catch_warnings():
        # Plain messages that look like URLs or paths are still just text
        warnings.simplefilter("ignore", MarkupResemblesLocatorWarning)
        text = BeautifulSoup(message, "html.parser").get_text()

    text = _CONTROL_CHARS.sub("", text)
    return text.strip()


def redact_url(url: str) -> str:
    """Reduce a URL to scheme, host and path; the query string is replaced.

    Webhook URLs often carry secrets in the query or userinfo, so neither
    reaches the logs.
    """
    try:
        parts = urlsplit(url)
    except ValueError:
        return REDACTED

    host = parts.hostname or ""
    if parts.port:
        host = f"{host}:{parts.port}"

    redacted = urlunsplit((parts.scheme, host, parts.path, "", ""))
    if parts.query:
        redacted = f"{redacted}?{REDACTED}"
    return redacted


def fingerprint_body(body: bytes, content_type: str | None) -> BodyFingerprint:
    """Describe a response body by length and SHA-256 checksum."""
    return BodyFingerprint(
        length=len(body),
        checksum=hashlib.sha256(body).hexdigest(),
        content_type=content_type or "unknown",
        received_at=datetime.now(timezone.utc).isoformat(),
    )
