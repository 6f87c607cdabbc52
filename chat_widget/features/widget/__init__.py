"""Embeddable chat widget: config, markup and the client state machine."""

from .models import ChatMessage, Role, WidgetConfig

__all__ = ["ChatMessage", "Role", "WidgetConfig"]
