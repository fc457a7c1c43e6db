"""Pydantic models for chatlink configuration."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ScannerConfig(BaseModel):
    """Segment scanner configuration."""

    model_config = ConfigDict(frozen=True)

    soft_wrap: bool = True
    soft_break: str = "\u200b"
    # Upper bound on the characters a single tag may span between `<` and `>`.
    max_tag_span: int = Field(default=2048, ge=64)


class RenderConfig(BaseModel):
    """Terminal rendering configuration."""

    model_config = ConfigDict(frozen=True)

    text_style: str = ""
    link_style: str = "bright_blue"
    underline: bool = True


class ChatlinkConfig(BaseModel):
    """Top-level chatlink configuration."""

    model_config = ConfigDict(frozen=True)

    scanner: ScannerConfig = ScannerConfig()
    render: RenderConfig = RenderConfig()
