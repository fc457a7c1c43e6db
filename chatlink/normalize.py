"""Text normalization applied before scanning or classifying chat markup."""

from __future__ import annotations

import re

_NAMED_ENTITIES = (
    ("&quot;", '"'),
    ("&apos;", "'"),
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
)
_SMART_QUOTES = str.maketrans(
    {
        "\u201c": '"',
        "\u201d": '"',
        "\u2018": "'",
        "\u2019": "'",
    }
)
_SEPARATORS = str.maketrans(
    {
        "\u2028": "\n",
        "\u2029": "\n",
        "\u00a0": " ",
    }
)
# Bounded digit runs: anything longer cannot be a valid code point and stays verbatim.
_NUMERIC_ENTITY_RE = re.compile(r"&#(?:[xX]([0-9A-Fa-f]{1,8})|([0-9]{1,10}));")
# An ampersand encoded any number of times over, e.g. `&amp;amp;` or `&#38;#38;`.
_AMP_CHAIN_RE = re.compile(r"&(?:amp;|#0{0,8}38;|#[xX]0{0,6}26;)+")
_NUMERIC_AMP_CHAIN_RE = re.compile(r"&(?:#0{0,8}38;|#[xX]0{0,6}26;)+")
_ESCAPED_QUOTE_RE = re.compile(r'(?<!\\)\\+"')
_SURROGATE_RE = re.compile(r"[\ud800-\udfff]")


def repair_surrogates(text: str) -> str:
    """Join split surrogate pairs and replace lone surrogates with U+FFFD."""
    if not _SURROGATE_RE.search(text):
        return text
    return text.encode("utf-16", "surrogatepass").decode("utf-16", "replace")


def fold_escaped_quotes(text: str) -> str:
    """Turn a quote escaped by one or more backslashes into a plain double quote."""
    if '\\"' not in text:
        return text
    return _ESCAPED_QUOTE_RE.sub('"', text)


def decode_named_entities(text: str) -> str:
    if "&" not in text:
        return text
    text = _AMP_CHAIN_RE.sub("&", text)
    for entity, char in _NAMED_ENTITIES:
        text = text.replace(entity, char)
    return text


def _numeric_entity_replacement(match: re.Match[str]) -> str:
    hex_digits, dec_digits = match.groups()
    code_point = int(hex_digits, 16) if hex_digits is not None else int(dec_digits)
    if code_point > 0x10FFFF or 0xD800 <= code_point <= 0xDFFF:
        return match.group(0)
    return chr(code_point)


def decode_numeric_entities(text: str) -> str:
    """Decode `&#DDD;` and `&#xHHH;` references; malformed ones are left as-is."""
    if "&#" not in text:
        return text
    text = _NUMERIC_AMP_CHAIN_RE.sub("&", text)
    return _NUMERIC_ENTITY_RE.sub(_numeric_entity_replacement, text)


def _decode_once(text: str, decode_entities: bool) -> str:
    out = fold_escaped_quotes(text)
    if decode_entities:
        out = decode_named_entities(out)
    out = out.translate(_SMART_QUOTES)
    return decode_numeric_entities(out)


def normalize_text(text: str, *, decode_entities: bool = True) -> str:
    """
    Normalize raw chat text.

    Steps, in order:
    - lone surrogates are replaced, split surrogate pairs joined
    - backslash-escaped quotes become plain quotes
    - named HTML entities are decoded (unless ``decode_entities`` is False)
    - smart quotes fold to their ASCII equivalents
    - numeric character references are decoded
    - line/paragraph separators become newlines, no-break spaces become spaces

    The middle four steps repeat until the text stops changing, so text that
    was escaped more than once (``&amp;amp;``, ``&#38;quot;``) comes out fully
    decoded and normalizing the result again is a no-op. Every pass that changes
    the text either shortens it or removes a smart quote, so the loop ends.
    """
    if not text:
        return ""
    out = repair_surrogates(text)
    while True:
        decoded = _decode_once(out, decode_entities)
        if decoded == out:
            break
        out = decoded
    return out.translate(_SEPARATORS)
