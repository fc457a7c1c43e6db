"""Config commands."""

import json

import rich_click as click
from pydantic import ValidationError
from rich.syntax import Syntax

from ..config import get_config_path, load_config, save_config
from ..models import ChatlinkConfig
from ._console import console


def _load_raw_config() -> dict:
    try:
        return load_config()
    except (OSError, json.JSONDecodeError) as e:
        raise click.ClickException(f"Cannot read {get_config_path()}: {e}") from e


def _parse_value(value: str):
    """JSON literals (`false`, `2048`, `"x"`) keep their type; anything else is a string."""
    try:
        return json.loads(value)
    except json.JSONDecodeError:
        return value


def _assign(cfg: dict, dotted_key: str, value) -> None:
    *sections, leaf = dotted_key.split(".")
    node = cfg
    for section in sections:
        child = node.get(section)
        if not isinstance(child, dict):
            child = node[section] = {}
        node = child
    node[leaf] = value


@click.group()
def config():
    """Manage configuration."""


@config.command("show")
def config_show():
    """Show the effective configuration (defaults merged with the config file)."""
    rendered = json.dumps(_load_raw_config(), indent=2)
    console.print(Syntax(rendered, "json", theme="monokai"))


@config.command("path")
def config_path():
    """Show configuration file path."""
    click.echo(str(get_config_path()))


@config.command("set")
@click.argument("key")
@click.argument("value")
def config_set(key: str, value: str):
    """Set KEY (e.g. render.link_style) to VALUE, rejecting values the scanner or renderer cannot use."""
    cfg = _load_raw_config()
    parsed = _parse_value(value)
    _assign(cfg, key, parsed)

    try:
        ChatlinkConfig.model_validate(cfg)
    except ValidationError as e:
        raise click.ClickException(f"Invalid value for {key}: {e}") from e

    save_config(cfg)
    console.print(f"Set [bold]{key}[/bold] = {parsed!r}")
