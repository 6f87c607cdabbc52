"""Chat widget state machine."""

import asyncio
import itertools
import logging
from dataclasses import dataclass

import httpx

from .models import ChatMessage, Role, WidgetConfig
from .rendering import MessageRenderer
from .transport import ChatTransport, ProxyTransport, TransportError, WebhookTransport
from .view import TYPING_TEXT, MessageBubble, WidgetView

logger = logging.getLogger(__name__)

NOT_CONFIGURED_MESSAGE = "Webhook URL not configured. Please contact administrator."
INVALID_RESPONSE_MESSAGE = "Sorry, I received an invalid response. Please try again."
CONNECTION_ERROR_MESSAGE = "Sorry, I'm having trouble connecting. Please try again later."


@dataclass
class WidgetState:
    """Visibility state owned by one controller instance."""

    is_open: bool = False
    has_opened: bool = False
    teaser_visible: bool = False
    teaser_dismissed: bool = False
    badge_visible: bool = False


class WidgetController:
    """
    Drives one widget: open/close, teaser, badge and the message exchange.

    All state lives on the instance, so several widgets can share a page.
    Concurrent ``send()`` calls are allowed; each one adds and removes its
    own typing indicator, keyed by a per-request id.
    """

    def __init__(
        self,
        config: WidgetConfig,
        view: WidgetView | None = None,
        transport: ChatTransport | None = None,
        renderer: MessageRenderer | None = None,
    ):
        self.config = config
        self.view = view or WidgetView()
        self.transport = transport
        self.renderer = renderer
        self.state = WidgetState()
        self._typing_ids = itertools.count(1)
        self._teaser_timer: asyncio.TimerHandle | None = None

    @classmethod
    def from_config(
        cls,
        config: WidgetConfig,
        client: httpx.AsyncClient | None = None,
        view: WidgetView | None = None,
    ) -> "WidgetController":
        """Build a controller with the transport the config calls for.

        The proxy endpoint wins over a direct webhook URL when both are set.
        """
        transport: ChatTransport | None = None
        if config.proxy_url and config.nonce:
            transport = ProxyTransport(config.proxy_url, config.nonce, client=client)
        elif config.webhook_url:
            transport = WebhookTransport(config.webhook_url, client=client)

        return cls(config, view=view, transport=transport, renderer=MessageRenderer())

    def mount(self) -> None:
        """Apply the initial state and schedule the teaser.

        Must be called from a running event loop when the teaser is enabled.
        """
        self.view.set_window_visible(False)
        self.view.set_teaser_visible(False)

        self.state.badge_visible = self.config.show_badge
        badge_text = str(self.config.badge_count) if self.config.badge_count else None
        self.view.set_badge(self.state.badge_visible, badge_text)

        if self.config.show_teaser_on_load:
            loop = asyncio.get_running_loop()
            self._teaser_timer = loop.call_later(
                self.config.teaser_delay_seconds, self.show_teaser
            )

    def unmount(self) -> None:
        if self._teaser_timer is not None:
            self._teaser_timer.cancel()
            self._teaser_timer = None

    async def aclose(self) -> None:
        """Unmount and release the transport's HTTP client."""
        self.unmount()
        if self.transport is not None:
            await self.transport.aclose()

    async def __aenter__(self) -> "WidgetController":
        self.mount()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    def toggle(self) -> None:
        if self.state.is_open:
            self.close()
        else:
            self.open()

    def open(self) -> None:
        self.hide_teaser()
        self.state.badge_visible = False
        self.view.set_badge(False)

        self.view.set_window_visible(True)
        self.state.is_open = True

        if not self.state.has_opened:
            self.state.has_opened = True
            if self.config.welcome_message:
                self.add_bot_message(self.config.welcome_message)

        self.view.focus_input()

    def close(self) -> None:
        # History stays; it lives as long as the controller
        self.view.set_window_visible(False)
        self.state.is_open = False

    def show_teaser(self) -> None:
        if self.state.is_open or self.state.teaser_dismissed:
            return
        self.state.teaser_visible = True
        self.view.set_teaser_visible(True)

    def hide_teaser(self) -> None:
        self.state.teaser_visible = False
        self.view.set_teaser_visible(False)

    def dismiss_teaser(self) -> None:
        """Close button on the teaser: hide it for good."""
        self.state.teaser_dismissed = True
        self.hide_teaser()

    def add_user_message(self, text: str) -> None:
        self.view.append(MessageBubble(ChatMessage(role=Role.USER, text=text)))

    def add_bot_message(self, text: str) -> None:
        html = self.renderer.render(text) if self.renderer else None
        self.view.append(
            MessageBubble(
                ChatMessage(role=Role.BOT, text=text, html=html),
                avatar=self.config.teaser_avatar or None,
            )
        )

    def _add_typing_indicator(self) -> str:
        typing_id = f"typing-{next(self._typing_ids)}"
        self.view.append(
            MessageBubble(
                ChatMessage(role=Role.BOT, text=TYPING_TEXT),
                avatar=self.config.teaser_avatar or None,
                typing_id=typing_id,
            )
        )
        return typing_id

    async def send(self, text: str | None = None) -> None:
        """
        Send a message, by default whatever the input holds.

        Blank input changes nothing and makes no request. Otherwise the user
        bubble appears at once, the input is cleared and the reply (or a
        fixed apology) is rendered when the exchange completes.
        """
        if text is None:
            text = self.view.input_value

        message = text.strip()
        if not message:
            return

        self.add_user_message(message)
        self.view.clear_input()

        await self._exchange(message)

    async def _exchange(self, message: str) -> None:
        if self.transport is None:
            self.add_bot_message(NOT_CONFIGURED_MESSAGE)
            return

        typing_id = self._add_typing_indicator()
        try:
            data = await self.transport.send(message)
        except TransportError as e:
            logger.warning("Chat exchange failed: %s", e)
            reply = CONNECTION_ERROR_MESSAGE
        except Exception:
            logger.exception("Unexpected error during chat exchange")
            reply = CONNECTION_ERROR_MESSAGE
        else:
            reply = _reply_text(data) or INVALID_RESPONSE_MESSAGE
        finally:
            self.view.remove_typing(typing_id)

        self.add_bot_message(reply)


def _reply_text(data: dict) -> str | None:
    """Pick the reply out of a webhook payload: ``response`` then ``output``.

    Non-zero numbers are shown as text; other non-string values are skipped.
    """
    for key in ("response", "output"):
        value = data.get(key)
        if isinstance(value, str) and value:
            return value
        if isinstance(value, (int, float)) and not isinstance(value, bool) and value:
            return str(value)
    return None
