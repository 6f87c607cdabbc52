"""Pydantic models for the chat widget."""

import re
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

_HEX_COLOR = re.compile(r"^#?([A-Fa-f0-9]{6}|[A-Fa-f0-9]{3})$")


class Role(str, Enum):
    """Author of a chat message."""

    USER = "user"
    BOT = "bot"


class ChatMessage(BaseModel):
    """A single rendered chat bubble."""

    role: Role
    text: str
    html: str | None = None  # Sanitized markup, None means literal text


class WidgetConfig(BaseModel):
    """
    Display and behaviour options for the widget.

    Supplied once at page load and read-only afterwards. Serialized to the
    page in camelCase, matching the ``window.ChatWidgetConfig`` object the
    embed markup injects.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    enabled: bool = True

    # Direct webhook target, basic variant only; never serialized
    webhook_url: str = Field(default="", exclude=True)

    # Colors
    primary_color: str = "#00BFA5"
    secondary_color: str = "#009688"
    background_color: str = "#FFFFFF"
    position: Literal["left", "right"] = "right"

    # Teaser
    teaser_text: str = (
        "Ready to grow your business? Chat with us now. We typically reply in minutes."
    )
    teaser_avatar: str = ""
    show_teaser_on_load: bool = True
    teaser_delay_seconds: float = Field(default=2.0, ge=0)

    # Header and copy
    header_name: str = "Chat with us"
    response_time_text: str = "We typically reply in minutes"
    welcome_message: str = "Hi there! \N{WAVING HAND SIGN} Have a question? I'm here to help!"
    powered_by_text: str = "Powered by n8n"
    powered_by_link: str = "#"

    # Badge
    show_badge: bool = True
    badge_count: int = 1

    # Hardened variant, filled in per page load
    proxy_url: str | None = None
    nonce: str | None = None

    @field_validator("primary_color", "secondary_color", "background_color", mode="before")
    @classmethod
    def normalize_color(cls, value, info: ValidationInfo):
        """Accept #RGB/#RRGGBB (with or without '#'), otherwise use the default."""
        default = cls.model_fields[info.field_name].default
        if not isinstance(value, str):
            return default
        match = _HEX_COLOR.match(value.strip())
        if not match:
            return default
        return f"#{match.group(1)}"

    @field_validator("position", mode="before")
    @classmethod
    def normalize_position(cls, value):
        return value if value in ("left", "right") else "right"

    @field_validator("badge_count", mode="before")
    @classmethod
    def normalize_badge_count(cls, value):
        try:
            return abs(int(value))
        except (TypeError, ValueError):
            return 1

    def public_dict(self) -> dict:
        """Config as exposed to page script (camelCase, no webhook URL)."""
        return self.model_dump(by_alias=True, mode="json")
