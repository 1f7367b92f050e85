"""CLI entry point for the token list builder.

Usage:
    tokenlist-build
    tokenlist-build --increment-version
"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional

import click
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from ..core.config import BuildConfig, load_environment
from ..core.exceptions import (
    ConfigurationError,
    InputDataError,
    MissingInputError,
    SchemaValidationError,
)
from ..core.types import ExitCode
from ..orchestrator import TokenListBuilder

# Initialize app
app = typer.Typer(
    name="tokenlist-build",
    help="Build the token list from per-chain token files",
    add_completion=False,
)

console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)


def setup_logging(level: Optional[str] = None) -> None:
    """Configure logging; progress goes to stdout."""
    level = (level or os.getenv("TOKENLIST_LOG_LEVEL") or "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(message)s",
        handlers=[RichHandler(console=console, show_time=False, show_path=False)],
        force=True,
    )


def report_error(error: Exception) -> None:
    """Print failure detail to stderr."""
    if isinstance(error, SchemaValidationError):
        err_console.print("[red]Invalid token list, errors below:[/]")
        for violation in error.violations:
            err_console.print(f"  - {escape(violation)}")
        return
    err_console.print(f"[red]{escape(str(error))}[/]")


@app.command()
def build(
    increment_version: bool = typer.Option(
        False,
        "--increment-version",
        help="Bump the minor version and timestamp before building",
    ),
) -> None:
    """
    Build build/tallycash.tokenlist.json from chains/*.json.

    Logos and the finished list are uploaded to Fleek storage when
    FLEEK_STORAGE_API_KEY and FLEEK_STORAGE_API_SECRET are set.
    """
    setup_logging()

    root = Path.cwd()
    try:
        config = BuildConfig.load(root)
        credentials = load_environment(root)
        builder = TokenListBuilder(config, credentials=credentials)
        result = builder.build(increment_version=increment_version)
    except (InputDataError, MissingInputError, ConfigurationError) as e:
        report_error(e)
        raise typer.Exit(int(e.exit_code))

    console.print(
        f"[green]Wrote {result.token_count} tokens "
        f"(version {result.version}) to {escape(str(result.output_path))}[/]"
    )


def main() -> None:
    """Main entry point."""
    try:
        exit_code = app(standalone_mode=False)
    except click.UsageError as e:
        e.show()
        sys.exit(int(ExitCode.USAGE))
    sys.exit(exit_code or int(ExitCode.OK))


if __name__ == "__main__":
    main()
