"""
urlsieve CLI - Command Line Interface

Entry point for all command-line operations. Every command reads URLs
from stdin, one per line, and writes results to stdout. Diagnostics go
to stderr.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from urlsieve.core.config import SieveConfig, load_rules_config
from urlsieve.core.constants import DEFAULTS
from urlsieve.core.exceptions import ConfigError, InputStreamError
from urlsieve.orchestrator.pipeline import (
    DeadEndpointFinder,
    EndpointCleaner,
    FormatRenderer,
    LineProcessor,
    read_lines,
)
from urlsieve.prober.http import HttpLivenessProbe

# Version
__version__ = "0.1.0"

# Create CLI app
app = typer.Typer(
    name="urlsieve",
    help="urlsieve - Filter noise out of harvested URLs and find dead endpoints",
    add_completion=False,
    no_args_is_help=True,
)

# Rich consoles; stdout carries results only
console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Route log records to stderr through rich.

    Args:
        verbose: Show parse failures and per-URL decisions
    """
    logging.basicConfig(
        level=logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )
    # library loggers (httpx, filelock) stay at WARNING
    logging.getLogger("urlsieve").setLevel(logging.DEBUG if verbose else logging.WARNING)


def _warn_if_interactive() -> None:
    if sys.stdin.isatty():
        err_console.print("[yellow]No input detected[/yellow]")


def _run(processor: LineProcessor) -> None:
    """Feed stdin through ``processor`` and echo its output."""
    _warn_if_interactive()
    try:
        processor.run(read_lines(sys.stdin), typer.echo)
    except InputStreamError as e:
        err_console.print(f"[red]Error:[/red] {e}")


def _build_config(**options) -> SieveConfig:
    config = SieveConfig(**options)
    try:
        config.validate()
    except ConfigError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)
    return config


# ============================================================================
# Operating Modes
# ============================================================================

@app.command()
def clean(
    format: str = typer.Option(
        DEFAULTS["format"],
        "--format",
        "-f",
        help="Format string selecting the value to classify (e.g. %p, %d%p)",
    ),
    unique: bool = typer.Option(
        DEFAULTS["unique"],
        "--unique/--no-unique",
        help="Emit each path and parameter set once",
    ),
    rules: Optional[Path] = typer.Option(
        None,
        "--rules",
        "-r",
        help="YAML file with extra path fragments and extensions to suppress",
        exists=True,
        dir_okay=False,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Report parse failures and suppressions on stderr",
    ),
) -> None:
    """
    Drop noise URLs and print the interesting endpoints.

    Suppresses paths containing UUIDs or content hashes, known static-asset
    directories, and image, font and stylesheet extensions.
    """
    setup_logging(verbose)
    config = _build_config(format=format, unique=unique, verbose=verbose)

    if rules:
        try:
            config.apply_rules(load_rules_config(rules))
        except ConfigError as e:
            err_console.print(f"[red]Error:[/red] {e}")
            raise typer.Exit(code=1)
        logger.debug(f"Loaded rules from {rules}")

    _run(EndpointCleaner(config))


@app.command()
def probe(
    unique: bool = typer.Option(
        DEFAULTS["unique"],
        "--unique/--no-unique",
        help="Probe each URL once",
    ),
    concurrency: int = typer.Option(
        DEFAULTS["concurrency"],
        "--concurrency",
        "-c",
        help="Maximum number of in-flight requests",
    ),
    timeout: float = typer.Option(
        DEFAULTS["timeout"],
        "--timeout",
        "-t",
        help="Per-request timeout in seconds",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Report parse failures and probe outcomes on stderr",
    ),
) -> None:
    """
    Print Wayback Machine URLs for endpoints that are no longer alive.

    Any response outside 200-299, a transport error or a timeout marks an
    endpoint as not alive. Output order follows probe completion.
    """
    setup_logging(verbose)
    config = _build_config(
        unique=unique,
        verbose=verbose,
        concurrency=concurrency,
        timeout=timeout,
    )

    http_probe = HttpLivenessProbe(
        timeout=config.timeout,
        follow_redirects=config.follow_redirects,
    )
    _run(DeadEndpointFinder(config, http_probe))


@app.command(name="format")
def format_urls(
    format: str = typer.Argument(..., help="Format string, e.g. '%s://%d%p'"),
    unique: bool = typer.Option(
        DEFAULTS["unique"],
        "--unique/--no-unique",
        help="Print each rendered value once",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Report parse failures on stderr",
    ),
) -> None:
    """
    Render every URL with a format string.

    Directives: %s scheme, %u userinfo, %d domain, %P port, %S subdomain,
    %r root domain, %t TLD, %p path, %e extension, %q query, %f fragment,
    %a authority, %@ %: %? %# conditional separators, %% literal percent.
    """
    setup_logging(verbose)
    config = _build_config(format=format, unique=unique, verbose=verbose)
    _run(FormatRenderer(config))


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold cyan]urlsieve[/bold cyan] version [yellow]{__version__}[/yellow]")


def main() -> None:
    """Main entry point for CLI."""
    try:
        app()
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(130)


if __name__ == "__main__":
    main()
