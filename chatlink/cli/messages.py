"""Message commands: parse, classify, render."""

import json
import logging

import rich_click as click
from pydantic import TypeAdapter, ValidationError
from rich.markup import escape
from rich.table import Table

from ..classifier import classify as classify_message
from ..config import load_chatlink_config
from ..models import ChatlinkConfig, LinkSegment, Segment
from ..renderer import render_segments
from ..scanner import parse_segments
from ._console import console, read_message

log = logging.getLogger(__name__)

_SEGMENTS = TypeAdapter(list[Segment])


def _load_config() -> ChatlinkConfig:
    try:
        return load_chatlink_config()
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        raise click.ClickException(f"Invalid configuration: {e}") from e


@click.command()
@click.argument("message")
@click.option("--json", "as_json", is_flag=True, help="Print segments as JSON")
def parse(message: str, as_json: bool):
    """Split MESSAGE into text and link segments (`-` reads stdin)."""
    cfg = _load_config()
    segments = parse_segments(read_message(message), config=cfg.scanner)
    log.debug("Parsed %d segments", len(segments))

    if as_json:
        click.echo(_SEGMENTS.dump_json(segments, indent=2).decode())
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Kind")
    table.add_column("Text")
    table.add_column("URL")
    for index, segment in enumerate(segments, 1):
        if isinstance(segment, LinkSegment):
            table.add_row(str(index), "link", escape(segment.label), escape(segment.url))
        else:
            table.add_row(str(index), "text", escape(segment.content), "")
    console.print(table)


@click.command()
@click.argument("message")
def classify(message: str):
    """Classify MESSAGE as plain, text with URLs, or hyperlink markup (`-` reads stdin)."""
    kind = classify_message(read_message(message))
    click.echo(kind.model_dump_json(indent=2))


@click.command()
@click.argument("message")
@click.option("--links", "show_links", is_flag=True, help="List link instances after the message")
def render(message: str, show_links: bool):
    """Render MESSAGE with styled, clickable links (`-` reads stdin)."""
    cfg = _load_config()
    rendered = render_segments(parse_segments(read_message(message), config=cfg.scanner), cfg.render)
    console.print(rendered.text)

    if show_links and rendered.links:
        console.print()
        for instance, url in rendered.links.items():
            console.print(f"  [dim]{instance}.[/dim] {escape(url)}")
