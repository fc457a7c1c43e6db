"""Coarse message triage: plain text, bare URLs, or hyperlink markup."""

from __future__ import annotations

import logging
import re

from .autolink import DEFAULT_DETECTOR
from .markup import OpenTagMatcher
from .models import HyperlinkTag, PlainMessage, ScannerConfig, TextWithURLs, WithHyperlink
from .normalize import normalize_text
from .url_repair import fix_url

log = logging.getLogger(__name__)

_SPAN = ScannerConfig().max_tag_span
_QUOTES = "'\"\u201c\u201d\u2018\u2019"

# Lenient on the attribute name: NavigateUri, NavigationUrl, navUri, ...
_OPEN_TAG = OpenTagMatcher(r"\bnav\w*?(?:uri|url)", _QUOTES, same_quote=True, max_span=_SPAN)
_CLOSE_TAG_RE = re.compile(r"</\s*hyperlink\s*>", re.IGNORECASE)
_ANY_TAG_RE = re.compile(rf"<\s*(?:/\s*)?\d*hyperlink\b[^>]{{0,{_SPAN}}}>", re.IGNORECASE)


def _extract_tags(text: str) -> list[HyperlinkTag]:
    tags: list[HyperlinkTag] = []
    pos = 0
    while True:
        open_tag = _OPEN_TAG.search(text, pos)
        if open_tag is None:
            break
        close_match = _CLOSE_TAG_RE.search(text, open_tag.end)
        if close_match is None:
            break
        url = fix_url(open_tag.value)
        if url:
            tags.append(HyperlinkTag(url=url, label=text[open_tag.end : close_match.start()]))
        else:
            log.debug("Dropping hyperlink with unrepairable URL %r", open_tag.value)
        pos = close_match.end()

    if tags:
        return tags

    # No complete pair: an open tag alone still carries a usable URL.
    for open_tag in _OPEN_TAG.finditer(text):
        url = fix_url(open_tag.value)
        if url:
            tags.append(HyperlinkTag(url=url, label=""))
    return tags


def _collect_plain_urls(text: str) -> list[str]:
    urls: list[str] = []
    seen: set[str] = set()

    def collect(chunk: str) -> None:
        for match in DEFAULT_DETECTOR.find(chunk):
            url = match.url or fix_url(match.text)
            if not url:
                continue
            key = url.lower()
            if key in seen:
                continue
            seen.add(key)
            urls.append(url)

    cursor = 0
    for token in _ANY_TAG_RE.finditer(text):
        if cursor < token.start():
            collect(text[cursor : token.start()])
        cursor = token.end()
    if cursor < len(text):
        collect(text[cursor:])
    return urls


def extract_hyperlink_tags(raw: str) -> list[HyperlinkTag]:
    """Extract URL/label pairs from hyperlink markup, repairing each URL."""
    return _extract_tags(normalize_text(raw or ""))


def extract_plain_urls(raw: str) -> list[str]:
    """Bare URLs outside hyperlink markup, de-duplicated case-insensitively in first-seen order."""
    return _collect_plain_urls(normalize_text(raw or ""))


def classify(raw: str) -> PlainMessage | TextWithURLs | WithHyperlink:
    """Classify a raw message. Hyperlink markup takes priority over bare URLs."""
    text = normalize_text(raw or "")
    tags = _extract_tags(text)
    if tags:
        return WithHyperlink(tags=tags)
    urls = _collect_plain_urls(text)
    if urls:
        return TextWithURLs(urls=urls)
    return PlainMessage()
