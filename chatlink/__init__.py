"""Chat hyperlink markup parsing - segments for rich rendering and coarse message triage."""

from importlib.metadata import PackageNotFoundError, version

from .classifier import classify
from .scanner import parse_segments

try:
    __version__ = version("chatlink")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"

__all__ = ["__version__", "classify", "parse_segments"]
