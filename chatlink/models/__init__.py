"""Pydantic models for the chatlink package."""

from __future__ import annotations

from .config import (
    ChatlinkConfig,
    RenderConfig,
    ScannerConfig,
)
from .segments import (
    SOFT_BREAK,
    HyperlinkTag,
    LinkSegment,
    MessageKind,
    PlainMessage,
    Segment,
    TextSegment,
    TextWithURLs,
    WithHyperlink,
    link_segments,
    segment_text,
    segments_text,
)

__all__ = [
    "SOFT_BREAK",
    "ChatlinkConfig",
    "HyperlinkTag",
    "LinkSegment",
    "MessageKind",
    "PlainMessage",
    "RenderConfig",
    "ScannerConfig",
    "Segment",
    "TextSegment",
    "TextWithURLs",
    "WithHyperlink",
    "link_segments",
    "segment_text",
    "segments_text",
]
