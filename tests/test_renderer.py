"""Tests for styled terminal rendering of parsed messages."""

from chatlink.models import LinkSegment, RenderConfig, TextSegment
from chatlink.renderer import LINK_INSTANCE_KEY, render_message, render_segments


def _link_spans(rendered):
    return [span for span in rendered.text.spans if span.style.link]


def test_adjacent_same_url_links_get_distinct_instances():
    rendered = render_message(
        '<Hyperlink NavigateUri="https://a.com">x</Hyperlink><Hyperlink NavigateUri="https://a.com">y</Hyperlink>'
    )
    assert rendered.text.plain == "xy"
    assert rendered.links == {1: "https://a.com", 2: "https://a.com"}

    spans = _link_spans(rendered)
    assert [(span.start, span.end) for span in spans] == [(0, 1), (1, 2)]
    assert [span.style.meta[LINK_INSTANCE_KEY] for span in spans] == [1, 2]
    assert rendered.url_at(0) == "https://a.com"
    assert rendered.url_at(1) == "https://a.com"


def test_instances_follow_segment_order():
    segments = [
        TextSegment(content="a "),
        LinkSegment(label="one", url="https://one.example"),
        TextSegment(content=" b "),
        LinkSegment(label="two", url="https://two.example"),
    ]
    rendered = render_segments(segments)
    assert rendered.text.plain == "a one b two"
    assert rendered.links == {1: "https://one.example", 2: "https://two.example"}
    assert rendered.url_at(0) is None
    assert rendered.url_at(2) == "https://one.example"
    assert rendered.url_at(8) == "https://two.example"


def test_link_style_comes_from_config():
    rendered = render_segments(
        [LinkSegment(label="x", url="https://a.com")],
        RenderConfig(link_style="cyan", underline=False),
    )
    (span,) = _link_spans(rendered)
    assert span.style.link == "https://a.com"
    assert span.style.color.name == "cyan"
    assert span.style.underline is False


def test_plain_text_has_no_links():
    rendered = render_message("hello world")
    assert rendered.text.plain == "hello world"
    assert rendered.links == {}
    assert _link_spans(rendered) == []
