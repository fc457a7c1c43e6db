"""Tests for URL validation and repair."""

import pytest

from chatlink.url_repair import HTTP_SCHEMES, fix_url, is_http_url, parse_absolute_url


def test_fix_url_escapes_lone_percent():
    assert fix_url("http://x.com/a%2path") == "http://x.com/a%252path"


def test_fix_url_keeps_valid_percent_escapes():
    assert fix_url("http://x.com/a%20b%2Fc") == "http://x.com/a%20b%2Fc"


def test_fix_url_folds_duplicate_query_markers():
    assert fix_url("http://x.com/?a=1?b=2") == "http://x.com/?a=1&b=2"


def test_fix_url_encodes_spaces():
    assert fix_url("https://x.com/a b") == "https://x.com/a%20b"


def test_fix_url_repairs_truncated_scheme_escape():
    assert fix_url("https://a.com/r?u=http%3//b.com") == "https://a.com/r?u=http%3A//b.com"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("www.example.com", "http://www.example.com"),
        ("example.com/path", "http://example.com/path"),
        ("  https://x.com/page).  ", "https://x.com/page"),
        ('"https://x.com/q?a=1"', "https://x.com/q?a=1"),
        ("ftp://files.example.com/a", "ftp://files.example.com/a"),
        ("mailto:bob@example.com", "mailto:bob@example.com"),
        ("https://en.wikipedia.org/wiki/Foo_(bar)", "https://en.wikipedia.org/wiki/Foo_(bar)"),
        ("https://x.com/a_(b)).", "https://x.com/a_(b)"),
    ],
)
def test_fix_url_cleanup(raw, expected):
    assert fix_url(raw) == expected


@pytest.mark.parametrize("raw", ["", "   ", "not a url", "http://", "localhost"])
def test_fix_url_gives_up_on_garbage(raw):
    assert fix_url(raw) is None


@pytest.mark.parametrize(
    "raw",
    [
        "http://x.com/a%2path",
        "http://x.com/?a=1?b=2",
        "www.example.com/a b",
        "https://a.com/r?u=http%3//b.com",
        "https://example.com/path?q=1#frag",
        "https://en.wikipedia.org/wiki/Foo_(bar)",
    ],
)
def test_fix_url_is_idempotent(raw):
    once = fix_url(raw)
    assert once is not None
    assert fix_url(once) == once


def test_parse_absolute_url_returns_input_unchanged():
    assert parse_absolute_url("HTTPS://Example.com/A") == "HTTPS://Example.com/A"
    assert parse_absolute_url("http://x.com") == "http://x.com"


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "relative/path",
        "http://",
        "http:///path",
        "http://x.com/a b",
        "http://x.com/a%zz",
        "http://x.com:99999/",
        "http://x.com/#a#b",
        "http://x.com/<script>",
        "mailto:",
    ],
)
def test_parse_absolute_url_rejects(raw):
    assert parse_absolute_url(raw) is None


def test_parse_absolute_url_scheme_allow_list():
    assert parse_absolute_url("ftp://x.com/f", schemes=HTTP_SCHEMES) is None
    assert parse_absolute_url("mailto:a@b.com") == "mailto:a@b.com"
    assert is_http_url("https://x.com")
    assert not is_http_url("javascript:alert(1)")
