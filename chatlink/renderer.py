"""Styled terminal text built from parsed message segments."""

from __future__ import annotations

from dataclasses import dataclass, field

from rich.style import Style
from rich.text import Text

from .models import LinkSegment, RenderConfig, ScannerConfig, TextSegment
from .scanner import parse_segments

LINK_INSTANCE_KEY = "link_instance"


@dataclass
class RenderedMessage:
    """Rich text for one message plus the URL behind each link instance."""

    text: Text
    links: dict[int, str] = field(default_factory=dict)

    def url_at(self, offset: int) -> str | None:
        """URL of the link covering a character offset, if any."""
        for span in self.text.spans:
            if span.start <= offset < span.end and isinstance(span.style, Style):
                instance = (span.style.meta or {}).get(LINK_INSTANCE_KEY)
                if instance is not None:
                    return self.links.get(instance)
        return None


def render_segments(
    segments: list[TextSegment | LinkSegment],
    config: RenderConfig | None = None,
) -> RenderedMessage:
    """
    Build styled text from segments.

    Each link gets its own instance number, counted from 1 in segment order, so
    two adjacent links to the same URL stay separate runs.
    """
    config = config or RenderConfig()
    base = Style.parse(config.text_style) if config.text_style else Style()
    link_base = base + Style.parse(config.link_style) if config.link_style else base

    text = Text()
    links: dict[int, str] = {}
    seq = 0
    for segment in segments:
        if isinstance(segment, TextSegment):
            text.append(segment.content, style=base)
            continue
        seq += 1
        links[seq] = segment.url
        style = link_base + Style(link=segment.url, underline=config.underline, meta={LINK_INSTANCE_KEY: seq})
        text.append(segment.label, style=style)
    return RenderedMessage(text=text, links=links)


def render_message(
    raw: str,
    config: RenderConfig | None = None,
    scanner: ScannerConfig | None = None,
) -> RenderedMessage:
    """Parse and render a raw message."""
    return render_segments(parse_segments(raw, config=scanner), config)
