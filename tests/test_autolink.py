"""Tests for bare URL detection and autolinking."""

import pytest

from chatlink.autolink import DEFAULT_DETECTOR, autolink_segments, soft_wrap_url_label
from chatlink.models import LinkSegment, TextSegment, segments_text

ZW = "\u200b"


def test_detector_finds_scheme_url_with_offsets():
    matches = DEFAULT_DETECTOR.find("visit http://x.com now")
    assert len(matches) == 1
    match = matches[0]
    assert (match.start, match.end) == (6, 18)
    assert match.text == "http://x.com"
    assert match.url == "http://x.com"


def test_detector_excludes_trailing_punctuation():
    matches = DEFAULT_DETECTOR.find("see http://x.com/a. Or http://y.com/b, then 'http://z.com'!")
    assert [m.text for m in matches] == ["http://x.com/a", "http://y.com/b", "http://z.com"]


def test_detector_keeps_balanced_parentheses():
    matches = DEFAULT_DETECTOR.find("(http://x.com/wiki/A_(b))")
    assert [m.text for m in matches] == ["http://x.com/wiki/A_(b)"]


def test_detector_www_and_email():
    matches = DEFAULT_DETECTOR.find("go to www.example.com today or mail bob@example.com.")
    assert [(m.text, m.url) for m in matches] == [
        ("www.example.com", "http://www.example.com"),
        ("bob@example.com", "mailto:bob@example.com"),
    ]


def test_detector_ignores_bare_scheme():
    assert DEFAULT_DETECTOR.find("http:// and mailto: alone") == []


def test_detector_reports_unparsable_url_as_none():
    matches = DEFAULT_DETECTOR.find("http://x.com/a%zz")
    assert len(matches) == 1
    assert matches[0].url is None


def test_soft_wrap_breaks_after_path_and_query_delimiters():
    wrapped = soft_wrap_url_label("https://example.com/a/b?c=d&e=f#g")
    assert wrapped == f"https://example.com/{ZW}a/{ZW}b?{ZW}c={ZW}d&{ZW}e={ZW}f#{ZW}g"
    assert wrapped.replace(ZW, "") == "https://example.com/a/b?c=d&e=f#g"


def test_soft_wrap_leaves_host_only_urls_alone():
    assert soft_wrap_url_label("https://example.com") == "https://example.com"
    assert soft_wrap_url_label("example.com/a") == "example.com/a"


def test_autolink_segments_soft_wraps_plain_urls():
    segments = autolink_segments("visit http://x.com/a now")
    assert segments == [
        TextSegment(content="visit "),
        LinkSegment(label=f"http://x.com/{ZW}a", url="http://x.com/a"),
        TextSegment(content=" now"),
    ]


def test_autolink_segments_keeps_display_text_when_it_differs_from_url():
    assert autolink_segments("www.x.com/a") == [LinkSegment(label="www.x.com/a", url="http://www.x.com/a")]


def test_autolink_segments_without_soft_wrap():
    segments = autolink_segments("http://x.com/a/b", soft_wrap=False)
    assert segments == [LinkSegment(label="http://x.com/a/b", url="http://x.com/a/b")]


def test_autolink_segments_preserve_whitespace_and_unparsable_matches():
    text = "  \n http://x.com/a%zz \t"
    segments = autolink_segments(text)
    assert segments == [TextSegment(content=text)]
    assert segments_text(segments) == text


def test_autolink_segments_empty():
    assert autolink_segments("") == []


def test_detector_finds_bare_hosts():
    matches = DEFAULT_DETECTOR.find("see example.com, docs.example.co.uk/guide?x=1 and (api.example.io:8080/v1).")
    assert [(m.text, m.url) for m in matches] == [
        ("example.com", "http://example.com"),
        ("docs.example.co.uk/guide?x=1", "http://docs.example.co.uk/guide?x=1"),
        ("api.example.io:8080/v1", "http://api.example.io:8080/v1"),
    ]


@pytest.mark.parametrize("text", ["open notes.txt or config.json", "e.g. this", "version 1.2.3", "x.y"])
def test_detector_leaves_file_names_and_abbreviations_alone(text):
    assert DEFAULT_DETECTOR.find(text) == []


def test_bare_host_inside_email_or_url_is_not_matched_twice():
    matches = DEFAULT_DETECTOR.find("bob@example.com http://example.org/a.html")
    assert [m.url for m in matches] == ["mailto:bob@example.com", "http://example.org/a.html"]


def test_autolink_segments_links_bare_host():
    assert autolink_segments("go to example.com/path now") == [
        TextSegment(content="go to "),
        LinkSegment(label="example.com/path", url="http://example.com/path"),
        TextSegment(content=" now"),
    ]
