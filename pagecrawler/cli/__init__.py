"""Command line interface for pagecrawler."""

from .main import ExitCode, app

__all__ = ["ExitCode", "app"]
