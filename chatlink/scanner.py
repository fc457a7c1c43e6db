"""Left-to-right scanner turning chat markup into text and link segments.

The scanner recognizes ``<Hyperlink NavigateUri="...">label</Hyperlink>`` pairs,
tolerates a close tag corrupted with injected digits (``</3Hyperlink>``) or a
missing close, recovers a usable URL from corrupted regions where possible, and
autolinks bare URLs in all text outside the markup.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from .autolink import DEFAULT_DETECTOR, autolink_segments
from .markup import OpenTag, OpenTagMatcher
from .models import LinkSegment, ScannerConfig, TextSegment
from .normalize import normalize_text
from .url_repair import HTTP_SCHEMES, parse_absolute_url

log = logging.getLogger(__name__)

Segments = list[TextSegment | LinkSegment]


@dataclass(frozen=True)
class MarkupPatterns:
    """Matchers for hyperlink markup."""

    open_tag: OpenTagMatcher
    close_tag: re.Pattern[str]
    any_tag: re.Pattern[str]


def compile_markup_patterns(max_tag_span: int) -> MarkupPatterns:
    """Build the markup matchers; runs inside a tag are capped at ``max_tag_span`` characters."""
    span = int(max_tag_span)
    open_tag = OpenTagMatcher(r"\b(?:NavigateUri|NavigationUri)", "\"'", same_quote=False, max_span=span)
    # Group 1 holds the digits of a corrupted close such as `</3Hyperlink>`.
    close_tag = re.compile(r"</\s*(\d*)Hyperlink\s*>", re.IGNORECASE)
    any_tag = re.compile(rf"<\s*(?:/\s*)?\d*Hyperlink\b[^>]{{0,{span}}}>", re.IGNORECASE)
    return MarkupPatterns(open_tag=open_tag, close_tag=close_tag, any_tag=any_tag)


DEFAULT_CONFIG = ScannerConfig()
DEFAULT_PATTERNS = compile_markup_patterns(DEFAULT_CONFIG.max_tag_span)


def _patterns_for(config: ScannerConfig) -> MarkupPatterns:
    if config.max_tag_span == DEFAULT_CONFIG.max_tag_span:
        return DEFAULT_PATTERNS
    return compile_markup_patterns(config.max_tag_span)


def _autolink(text: str, config: ScannerConfig) -> Segments:
    return autolink_segments(text, soft_wrap=config.soft_wrap, soft_break=config.soft_break)


def autolink_outside_tokens(
    text: str,
    *,
    config: ScannerConfig = DEFAULT_CONFIG,
    patterns: MarkupPatterns | None = None,
) -> Segments:
    """Autolink text while keeping any tag-shaped token as literal, unlinked text."""
    if not text:
        return []
    patterns = patterns or _patterns_for(config)
    segments: Segments = []
    cursor = 0
    for token in patterns.any_tag.finditer(text):
        if cursor < token.start():
            segments.extend(_autolink(text[cursor : token.start()], config))
        segments.append(TextSegment(content=token.group(0)))
        cursor = token.end()
    if cursor < len(text):
        segments.extend(_autolink(text[cursor:], config))
    return segments


def _split_around_link(text: str, start: int, link_start: int, link_end: int, end: int, url: str) -> Segments:
    segments: Segments = []
    if start < link_start:
        segments.append(TextSegment(content=text[start:link_start]))
    segments.append(LinkSegment(label=url, url=url))
    if link_end < end:
        segments.append(TextSegment(content=text[link_end:end]))
    return segments


def _recover_corrupted(text: str, tag: OpenTag, end: int) -> Segments:
    """
    Degrade a region whose close tag is corrupted or missing.

    The recovered URL replaces the original label: for broken markup the URL is
    the only part we trust.
    """
    candidate = tag.value.strip()

    direct = parse_absolute_url(candidate, schemes=HTTP_SCHEMES)
    if direct:
        log.debug("Recovered %s from corrupted hyperlink at %d", direct, tag.start)
        return _split_around_link(text, tag.start, tag.value_start, tag.value_end, end, direct)

    matches = DEFAULT_DETECTOR.find(candidate)
    if len(matches) == 1 and matches[0].url:
        match = matches[0]
        offset = tag.value_start + (len(tag.value) - len(tag.value.lstrip()))
        log.debug("Detected %s inside corrupted hyperlink at %d", match.url, tag.start)
        return _split_around_link(text, tag.start, offset + match.start, offset + match.end, end, match.url)

    log.debug("Unrecoverable hyperlink at %d kept as text", tag.start)
    return [TextSegment(content=text[tag.start : end])]


def _resolve_pair(text: str, tag: OpenTag, close_match: re.Match[str]) -> Segments:
    # Label text is taken verbatim; URLs inside it are not autolinked.
    label = text[tag.end : close_match.start()]
    url = parse_absolute_url(tag.value.strip(), schemes=HTTP_SCHEMES)
    if url:
        return [LinkSegment(label=label, url=url)]
    log.debug("Hyperlink URL %r does not parse; keeping label as text", tag.value)
    return [TextSegment(content=label)] if label else []


def parse_segments(raw: str, *, config: ScannerConfig | None = None) -> Segments:
    """
    Parse raw chat text into ordered text and link segments.

    Never raises. Link segments come out in input order, which is the order a
    renderer must hand out link instance ids.
    """
    config = config or DEFAULT_CONFIG
    patterns = _patterns_for(config)
    text = normalize_text(raw or "")
    segments: Segments = []
    cursor = 0

    while True:
        tag = patterns.open_tag.search(text, cursor)
        if tag is None:
            break
        if cursor < tag.start:
            segments.extend(autolink_outside_tokens(text[cursor : tag.start], config=config, patterns=patterns))

        # Nearest close of either shape decides between a pair and a corrupted region.
        close_match = patterns.close_tag.search(text, tag.end)
        if close_match is not None and not close_match.group(1):
            segments.extend(_resolve_pair(text, tag, close_match))
            cursor = close_match.end()
        else:
            end = close_match.end() if close_match is not None else len(text)
            segments.extend(_recover_corrupted(text, tag, end))
            cursor = end

    if cursor < len(text):
        segments.extend(autolink_outside_tokens(text[cursor:], config=config, patterns=patterns))
    return segments
