"""Bare URL detection and autolinking for text outside hyperlink markup."""

from __future__ import annotations

import re
from dataclasses import dataclass

from .models import SOFT_BREAK, LinkSegment, TextSegment
from .url_repair import parse_absolute_url

# Every alternative starts at a token boundary, so a failed attempt never rescans
# a run of word characters from inside.
_LINK_RE = re.compile(
    r"(?P<scheme>(?<![A-Za-z0-9+.\-])(?:(?:https?|ftp)://|mailto:)[^\s<>\"]+)"
    r"|(?P<www>(?<![\w.\-/@])www\.[^\s<>\"]+)"
    r"|(?P<email>(?<![\w.+\-])[\w.+\-]+@[A-Za-z0-9\-]+(?:\.[A-Za-z0-9\-]+)+)"
    r"|(?P<host>(?<![\w.\-/@:+])(?:[A-Za-z0-9\-]{1,63}\.)+(?P<tld>[A-Za-z]{2,63})\b"
    r"(?::[0-9]{1,5})?(?:[/?#][^\s<>\"]*)?)",
    re.IGNORECASE,
)
# Bare hosts need a country code or one of these generic top-level domains, so
# file names such as `notes.txt` or `config.json` stay plain text.
_GENERIC_TLDS = frozenset(
    {
        "com", "net", "org", "edu", "gov", "mil", "int", "info", "biz", "name", "pro",
        "io", "ai", "app", "dev", "xyz", "online", "site", "tech", "store", "shop",
        "blog", "cloud", "page", "news", "media", "live", "email", "link", "wiki",
    }
)
_TRAILING_PUNCT = ".,;:!?'\"*"
_BRACKET_PAIRS = {")": "(", "]": "[", "}": "{"}
_SOFT_BREAK_AFTER_RE = re.compile(r"[/?#&=]")


@dataclass(frozen=True)
class LinkMatch:
    """A detected link: offsets into the scanned text, the literal text, and its URL."""

    start: int
    end: int
    text: str
    url: str | None


def _trimmed_end(text: str, start: int, end: int) -> int:
    """Drop trailing punctuation and closing brackets that have no opener inside the match."""
    counts = {closer: text.count(closer, start, end) for closer in _BRACKET_PAIRS}
    openers = {closer: text.count(opener, start, end) for closer, opener in _BRACKET_PAIRS.items()}
    while end > start:
        char = text[end - 1]
        if char in _TRAILING_PUNCT:
            end -= 1
        elif char in _BRACKET_PAIRS and counts[char] > openers[char]:
            counts[char] -= 1
            end -= 1
        else:
            break
    return end


class LinkDetector:
    """Generic recognizer for web, ftp and e-mail links and bare host names in free text."""

    def __init__(self, pattern: re.Pattern[str] = _LINK_RE):
        self._pattern = pattern

    def find(self, text: str) -> list[LinkMatch]:
        """Return link matches in left-to-right order."""
        if not text:
            return []
        matches: list[LinkMatch] = []
        for match in self._pattern.finditer(text):
            start = match.start()
            end = _trimmed_end(text, start, match.end())
            literal = text[start:end]
            if not literal:
                continue
            kind = match.lastgroup
            if kind == "host":
                tld = match.group("tld").lower()
                if len(tld) != 2 and tld not in _GENERIC_TLDS:
                    continue
                candidate = f"http://{literal}"
            elif kind == "www":
                if "." not in literal[4:]:
                    continue
                candidate = f"http://{literal}"
            elif kind == "email":
                candidate = f"mailto:{literal}"
            else:
                if literal.endswith("://") or literal.lower() == "mailto:":
                    continue
                candidate = literal
            matches.append(LinkMatch(start=start, end=end, text=literal, url=parse_absolute_url(candidate)))
        return matches


DEFAULT_DETECTOR = LinkDetector()


def soft_wrap_url_label(label: str, marker: str = SOFT_BREAK) -> str:
    """Insert a break opportunity after each `/ ? # & =` past the host of a URL label."""
    scheme_end = label.find("://")
    if scheme_end == -1:
        return label
    host_end = label.find("/", scheme_end + 3)
    if host_end == -1:
        return label
    tail = _SOFT_BREAK_AFTER_RE.sub(lambda m: m.group(0) + marker, label[host_end:])
    return label[:host_end] + tail


def autolink_segments(
    text: str,
    *,
    soft_wrap: bool = True,
    soft_break: str = SOFT_BREAK,
    detector: LinkDetector = DEFAULT_DETECTOR,
) -> list[TextSegment | LinkSegment]:
    """Split untagged text into text and link segments covering every character."""
    if not text:
        return []
    segments: list[TextSegment | LinkSegment] = []
    cursor = 0
    for match in detector.find(text):
        if match.url is None:
            continue
        if cursor < match.start:
            segments.append(TextSegment(content=text[cursor : match.start]))
        label = match.text
        if soft_wrap and label == match.url:
            label = soft_wrap_url_label(label, soft_break)
        segments.append(LinkSegment(label=label, url=match.url))
        cursor = match.end
    if cursor < len(text):
        segments.append(TextSegment(content=text[cursor:]))
    return segments
