"""Markdown rendering for untrusted bot replies."""

import nh3
from markdown_it import MarkdownIt

ALLOWED_TAGS = {
    "a", "b", "blockquote", "br", "code", "del", "em", "h1", "h2", "h3",
    "h4", "h5", "h6", "hr", "i", "li", "ol", "p", "pre", "s", "strong",
    "table", "tbody", "td", "th", "thead", "tr", "ul",
}

ALLOWED_ATTRIBUTES = {
    "a": {"href", "title"},
    "td": {"style"},
    "th": {"style"},
}

ALLOWED_URL_SCHEMES = {"http", "https", "mailto"}


class MessageRenderer:
    """Render markdown to HTML that is safe to inject into the page.

    Two layers: the parser never passes raw HTML through, and the rendered
    output is then cleaned against an allow-list. The sanitizer is the
    authoritative layer; the parser setting only reduces what it sees.
    """

    def __init__(self):
        self.md = MarkdownIt(
            "js-default",
            {"html": False, "linkify": True, "typographer": True},
        )

    def render(self, text: str) -> str:
        return self.sanitize(self.md.render(text))

    @staticmethod
    def sanitize(html: str) -> str:
        return nh3.clean(
            html,
            tags=ALLOWED_TAGS,
            attributes=ALLOWED_ATTRIBUTES,
            url_schemes=ALLOWED_URL_SCHEMES,
            link_rel="noopener noreferrer nofollow",
            filter_style_properties={"text-align"},
        )
