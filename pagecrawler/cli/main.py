#!/usr/bin/env python3
"""Main CLI entry point for pagecrawler using Typer."""

import asyncio
import logging
from enum import IntEnum
from pathlib import Path
from typing import Annotated, Optional

import typer

from .. import __version__
from ..config import load_config
from ..errors import ConfigLoadError
from ..runner import run as run_crawl

logger = logging.getLogger(__name__)


class ExitCode(IntEnum):
    """CLI exit codes."""
    SUCCESS = 0
    CONFIG_ERROR = 3      # Configuration or setup error
    RUNTIME_ERROR = 4     # Error during the browser session


app = typer.Typer(
    name="pagecrawler",
    help="Crawl a paginated page in a headless browser and record the session",
    add_completion=False,
)


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Configure root logging for CLI runs."""
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    )


@app.callback()
def main():
    """
    pagecrawler - drive one browser session against a paginated page.

    Loads cookies from the previous run, navigates, dismisses the consent
    overlay, discovers pagination, records metrics, cookies, a screenshot,
    the page content and all network traffic into one JSON snapshot.
    """
    pass


@app.command(name="version")
def show_version():
    """Show version information."""
    typer.echo(f"pagecrawler v{__version__}")


@app.command()
def run(
    url: Annotated[
        Optional[str],
        typer.Argument(help="Page to crawl (overrides target_url from the config file)")
    ] = None,

    config_file: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Path to YAML configuration file")
    ] = None,

    output_dir: Annotated[
        Optional[Path],
        typer.Option("--output-dir", "-o", help="Directory for snapshot and screenshot")
    ] = None,

    remote_browser: Annotated[
        Optional[str],
        typer.Option("--remote-browser", help="CDP endpoint of a running browser (takes precedence over launching)")
    ] = None,

    executable_path: Annotated[
        Optional[Path],
        typer.Option("--executable-path", help="Browser binary to launch")
    ] = None,

    headful: Annotated[
        bool,
        typer.Option("--headful", help="Run the launched browser with a window")
    ] = False,

    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging")
    ] = False,

    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Only log warnings and errors")
    ] = False,
):
    """Run one crawl session and export its event log."""
    configure_logging(verbose=verbose, quiet=quiet)

    browser_overrides = {
        'remote_endpoint': remote_browser,
        'executable_path': str(executable_path) if executable_path else None,
        'headless': False if headful else None,
    }

    try:
        config = load_config(
            config_file,
            overrides={
                'target_url': url,
                'output_dir': output_dir,
                'browser': browser_overrides,
            },
        )
    except ConfigLoadError as e:
        typer.echo(f"❌ Configuration error: {e}", err=True)
        raise typer.Exit(code=ExitCode.CONFIG_ERROR.value)

    try:
        event_log = asyncio.run(run_crawl(config))
    except KeyboardInterrupt:
        typer.echo("❌ Operation interrupted by user", err=True)
        raise typer.Exit(code=ExitCode.RUNTIME_ERROR.value)
    except Exception as e:
        logger.exception(f"Crawl failed: {e}")
        typer.echo(f"❌ Runtime error: {e}", err=True)
        raise typer.Exit(code=ExitCode.RUNTIME_ERROR.value)

    typer.echo(f"✅ Recorded {len(event_log)} events to {config.snapshot_path}")


if __name__ == "__main__":
    app()
