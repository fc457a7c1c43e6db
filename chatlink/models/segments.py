"""Pydantic models for parsed chat message segments and message kinds."""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

SOFT_BREAK = "\u200b"


class TextSegment(BaseModel):
    """A run of literal text."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"
    content: str


class LinkSegment(BaseModel):
    """A hyperlink with its display label and validated absolute URL."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["link"] = "link"
    label: str
    url: str


Segment = Annotated[TextSegment | LinkSegment, Field(discriminator="kind")]


class HyperlinkTag(BaseModel):
    """A URL/label pair pulled out of hyperlink markup."""

    model_config = ConfigDict(frozen=True)

    url: str
    label: str = ""


class PlainMessage(BaseModel):
    """No hyperlink markup and no bare URLs."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["plain"] = "plain"


class TextWithURLs(BaseModel):
    """Bare URLs found outside any hyperlink markup."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["text_with_urls"] = "text_with_urls"
    urls: list[str]


class WithHyperlink(BaseModel):
    """At least one recoverable hyperlink tag."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["with_hyperlink"] = "with_hyperlink"
    tags: list[HyperlinkTag]


MessageKind = Annotated[PlainMessage | TextWithURLs | WithHyperlink, Field(discriminator="kind")]


def segment_text(segment: TextSegment | LinkSegment) -> str:
    """Visible text of a segment with soft-break markers removed."""
    if isinstance(segment, LinkSegment):
        return segment.label.replace(SOFT_BREAK, "")
    return segment.content


def segments_text(segments: list[TextSegment | LinkSegment]) -> str:
    """Concatenate the visible text of all segments."""
    return "".join(segment_text(segment) for segment in segments)


def link_segments(segments: list[TextSegment | LinkSegment]) -> list[LinkSegment]:
    """Link segments in emission order."""
    return [segment for segment in segments if isinstance(segment, LinkSegment)]
