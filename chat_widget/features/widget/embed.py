"""Widget markup generator."""

import json
from html import escape
from urllib.parse import urlsplit

from .models import WidgetConfig

CHAT_ICON = (
    '<svg viewBox="0 0 24 24"><path d="M20 2H4c-1.1 0-2 .9-2 2v18l4-4h14c1.1 0 '
    '2-.9 2-2V4c0-1.1-.9-2-2-2z"/></svg>'
)


def safe_url(url: str) -> str:
    """Escape a URL for an attribute, dropping anything but http(s) and '#'."""
    url = url.strip()
    if url == "#":
        return url
    if urlsplit(url).scheme.lower() not in ("http", "https"):
        return ""
    return escape(url, quote=True)


def config_script(config: WidgetConfig) -> str:
    """Inline script exposing the public config as ``window.ChatWidgetConfig``."""
    payload = (
        json.dumps(config.public_dict())
        .replace("<", "\\u003c")
        .replace(">", "\\u003e")
        .replace("&", "\\u0026")
    )
    return f"<script>window.ChatWidgetConfig = {payload};</script>"


def container_css(config: WidgetConfig) -> str:
    """Inline style for the container: theme colour variables and position."""
    rules = [
        f"--primary-color:{config.primary_color}",
        f"--secondary-color:{config.secondary_color}",
        f"--background-color:{config.background_color}",
    ]
    if config.position == "left":
        rules += ["left:20px", "right:auto"]
    return ";".join(rules)


def render_widget_markup(config: WidgetConfig) -> str:
    """
    Render the widget container: button, badge, teaser, chat window.

    Every configured string is HTML-escaped; the controller script picks the
    elements up by id.
    """
    avatar = safe_url(config.teaser_avatar)
    powered_link = safe_url(config.powered_by_link)
    powered_text = escape(config.powered_by_text)

    if powered_link and powered_link != "#":
        powered_by = f'<a href="{powered_link}" target="_blank" rel="noopener">{powered_text}</a>'
    else:
        powered_by = powered_text

    position_class = " position-left" if config.position == "left" else ""
    container_style = escape(container_css(config), quote=True)
    badge_style = "" if config.show_badge else ' style="display:none"'

    return f'''<div id="chat-widget-container" class="chat-widget{position_class}" style="{container_style}">
  <div id="chat-button">
    {CHAT_ICON}
    <div id="chat-badge"{badge_style}>{config.badge_count}</div>
  </div>
  <div id="teaser-bubble" style="display:none">
    <span id="teaser-close">&times;</span>
    <div style="display: flex; align-items: start;">
      <img id="teaser-avatar" src="{avatar}" alt="Avatar">
      <div id="teaser-text">{escape(config.teaser_text)}</div>
    </div>
  </div>
  <div id="chat-window" style="display:none">
    <div id="chat-header">
      <img id="header-avatar" src="{avatar}" alt="Avatar">
      <div>
        <div id="header-name">{escape(config.header_name)}</div>
        <div id="header-response">{escape(config.response_time_text)}</div>
      </div>
      <span id="header-close">&times;</span>
    </div>
    <div id="chat-messages"></div>
    <div id="chat-input">
      <input id="input-field" type="text" placeholder="Type your message...">
      <button id="send-button">Send</button>
    </div>
    <div id="powered-by">{powered_by}</div>
  </div>
</div>
{config_script(config)}'''
