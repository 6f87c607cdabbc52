"""In-memory display surface driven by the widget controller."""

from dataclasses import dataclass, field

from .models import ChatMessage, Role

TYPING_TEXT = "..."


@dataclass
class MessageBubble:
    """One entry in the message list."""

    message: ChatMessage
    avatar: str | None = None
    typing_id: str | None = None

    @property
    def is_typing(self) -> bool:
        return self.typing_id is not None


@dataclass
class WidgetView:
    """
    Widget markup state: what is visible, what the input holds, which
    bubbles are listed and where the list is scrolled.

    Every mutating method bumps ``mutations`` so callers can tell whether
    an action touched the display at all.
    """

    window_visible: bool = False
    teaser_visible: bool = False
    badge_visible: bool = False
    badge_text: str = ""
    input_value: str = ""
    input_focused: bool = False
    scroll_top: int = 0
    bubbles: list[MessageBubble] = field(default_factory=list)
    mutations: int = 0

    def _touch(self) -> None:
        self.mutations += 1

    def set_window_visible(self, visible: bool) -> None:
        self.window_visible = visible
        self._touch()

    def set_teaser_visible(self, visible: bool) -> None:
        self.teaser_visible = visible
        self._touch()

    def set_badge(self, visible: bool, text: str | None = None) -> None:
        self.badge_visible = visible
        if text is not None:
            self.badge_text = text
        self._touch()

    def focus_input(self) -> None:
        self.input_focused = True
        self._touch()

    def clear_input(self) -> None:
        self.input_value = ""
        self._touch()

    def append(self, bubble: MessageBubble) -> None:
        self.bubbles.append(bubble)
        self._touch()
        self.scroll_to_bottom()

    def remove_typing(self, typing_id: str) -> bool:
        """Remove the typing placeholder with this id; False if it is gone."""
        for index, bubble in enumerate(self.bubbles):
            if bubble.typing_id == typing_id:
                del self.bubbles[index]
                self._touch()
                return True
        return False

    def scroll_to_bottom(self) -> None:
        self.scroll_top = len(self.bubbles)

    @property
    def scrolled_to_bottom(self) -> bool:
        return self.scroll_top == len(self.bubbles)

    @property
    def messages(self) -> list[ChatMessage]:
        """Rendered messages, typing placeholders excluded."""
        return [b.message for b in self.bubbles if not b.is_typing]

    @property
    def typing_indicators(self) -> list[MessageBubble]:
        return [b for b in self.bubbles if b.is_typing]

    def messages_by(self, role: Role) -> list[ChatMessage]:
        return [m for m in self.messages if m.role == role]
