"""Forward-search matcher for hyperlink open tags."""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass

_TAG_START_RE = re.compile(r"<\s*Hyperlink\b", re.IGNORECASE)


@dataclass(frozen=True)
class OpenTag:
    """An open tag located in a string, with the span of its URL attribute value."""

    start: int
    end: int
    value_start: int
    value_end: int
    value: str


class OpenTagMatcher:
    """
    Locate ``<Hyperlink ... attr="value" ...>`` open tags.

    Equivalent to a single pattern of the shape
    ``<Hyperlink [^>]*? attr = q value q [^>]* >`` but run as a forward search:
    the attribute must start before the first ``>`` after the tag name, the
    value may contain ``>``, and the tag ends at the first ``>`` after the value.
    Each step scans at most ``max_span`` characters, so a pile of unterminated
    tags costs linear time.
    """

    def __init__(self, attribute: str, quotes: str, *, same_quote: bool, max_span: int):
        escaped = re.escape(quotes)
        self._attribute = re.compile(rf"{attribute}\s*=\s*([{escaped}])", re.IGNORECASE)
        self._value = re.compile(rf"[^{escaped}]{{1,{max_span}}}")
        self._quotes = quotes
        self._same_quote = same_quote
        self._max_span = max_span

    def _match_at(self, text: str, name_end: int, start: int) -> OpenTag | None:
        first_gt = text.find(">", name_end, name_end + self._max_span + 1)
        if first_gt == -1:
            return None
        for attr in self._attribute.finditer(text, name_end, first_gt):
            value = self._value.match(text, attr.end())
            if value is None:
                continue
            quote_at = value.end()
            if quote_at >= len(text) or text[quote_at] not in self._quotes:
                continue
            if self._same_quote and text[quote_at] != attr.group(1):
                continue
            tag_end = text.find(">", quote_at + 1, quote_at + self._max_span + 2)
            if tag_end == -1:
                continue
            return OpenTag(
                start=start,
                end=tag_end + 1,
                value_start=value.start(),
                value_end=value.end(),
                value=value.group(0),
            )
        return None

    def search(self, text: str, pos: int = 0) -> OpenTag | None:
        """First open tag starting at or after ``pos``."""
        for name in _TAG_START_RE.finditer(text, pos):
            tag = self._match_at(text, name.end(), name.start())
            if tag is not None:
                return tag
        return None

    def finditer(self, text: str) -> Iterator[OpenTag]:
        """Non-overlapping open tags, left to right."""
        pos = 0
        while True:
            tag = self.search(text, pos)
            if tag is None:
                return
            yield tag
            pos = tag.end
