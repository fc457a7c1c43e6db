"""Shared Rich console instance and helpers."""

from click import get_text_stream
from rich.console import Console

console = Console()


def read_message(message: str) -> str:
    """Return the message argument, reading stdin when it is `-`."""
    if message == "-":
        return get_text_stream("stdin").read()
    return message
