"""Absolute URL validation and best-effort repair of malformed URL candidates."""

from __future__ import annotations

import re
from collections.abc import Iterable
from urllib.parse import urlsplit

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*:")
_SCHEME_AUTHORITY_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*://")
_INVALID_CHARS_RE = re.compile(r'[\s\x00-\x1f\x7f<>"\\^`{|}]')
_BAD_PERCENT_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_BROKEN_SCHEME_ESCAPE_RE = re.compile(r"http%3(?![0-9a-f])", re.IGNORECASE)
_HOST_RE = re.compile(r"^[^\s/?#@\[\]()<>,;'\"]+$")
_TRIM_PUNCT = ".,;:!?)]}'\">"
_BRACKET_PAIRS = {")": "(", "]": "[", "}": "{"}
_HIERARCHICAL_SCHEMES = {"http", "https", "ftp"}

HTTP_SCHEMES = ("http", "https")


def parse_absolute_url(candidate: str | None, *, schemes: Iterable[str] | None = None) -> str | None:
    """
    Return ``candidate`` if it is a well-formed absolute URL, else None.

    The string is never rewritten: two URLs are equal only when their absolute
    forms match exactly. ``schemes`` restricts the accepted schemes (lowercase).
    """
    if not candidate or not _SCHEME_RE.match(candidate):
        return None
    if _INVALID_CHARS_RE.search(candidate) or _BAD_PERCENT_RE.search(candidate):
        return None
    if candidate.count("#") > 1:
        return None
    try:
        parts = urlsplit(candidate)
        parts.port  # noqa: B018 - raises ValueError on a malformed port
    except ValueError:
        return None

    scheme = parts.scheme.lower()
    if schemes is not None and scheme not in set(schemes):
        return None
    if scheme in _HIERARCHICAL_SCHEMES:
        host = parts.hostname or ""
        if not host:
            return None
        if "[" not in parts.netloc and not _HOST_RE.match(host):
            return None
    elif not (parts.netloc or parts.path):
        return None
    return candidate


def is_http_url(candidate: str | None) -> bool:
    return parse_absolute_url(candidate, schemes=HTTP_SCHEMES) is not None


def _trim_punctuation(value: str) -> str:
    """Strip punctuation from both ends, keeping closing brackets that close something inside."""
    value = value.lstrip(_TRIM_PUNCT)
    closers = {closer: value.count(closer) for closer in _BRACKET_PAIRS}
    openers = {closer: value.count(opener) for closer, opener in _BRACKET_PAIRS.items()}
    end = len(value)
    while end:
        char = value[end - 1]
        if char not in _TRIM_PUNCT:
            break
        if char in _BRACKET_PAIRS:
            if closers[char] <= openers[char]:
                break
            closers[char] -= 1
        end -= 1
    return value[:end]


def _escape_stray_percents(value: str) -> str:
    if "%" not in value:
        return value
    return _BAD_PERCENT_RE.sub("%25", value)


def _fold_extra_query_markers(value: str) -> str:
    first = value.find("?")
    if first == -1:
        return value
    return value[: first + 1] + value[first + 1 :].replace("?", "&")


def fix_url(candidate: str | None) -> str | None:
    """
    Repair common URL corruptions and return a validated absolute URL.

    Repairs, in order:
    - surrounding whitespace and punctuation are trimmed, except closing
      brackets matched by an opener inside the URL
    - spaces are percent-encoded
    - ``http%3`` without a hex digit after it becomes ``http%3A``
    - a ``%`` not followed by two hex digits becomes ``%25``
    - every ``?`` after the first becomes ``&``
    - a missing scheme is filled in with ``http://``

    Returns None when the result still does not parse. Repairing a repaired URL
    returns it unchanged.
    """
    if not candidate:
        return None
    value = _trim_punctuation(candidate.strip())
    if " " in value:
        value = value.replace(" ", "%20")
    value = _BROKEN_SCHEME_ESCAPE_RE.sub("http%3A", value)
    value = _escape_stray_percents(value)
    value = _fold_extra_query_markers(value)

    lower = value.lower()
    has_scheme = _SCHEME_AUTHORITY_RE.match(value) is not None or lower.startswith("mailto:")
    if not has_scheme and (lower.startswith("www.") or "." in value):
        value = f"http://{value}"
    return parse_absolute_url(value)
