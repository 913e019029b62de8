"""CLI application for ncu."""

import asyncio
import logging
from importlib.metadata import version as package_version
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from core.config import get_settings
from core.errors import NcuError
from core.models import CheckOptions, UpdateDecision, UpdateReport
from core.resolve_node import NodeResolver
from core.update import check_for_updates

console = Console(soft_wrap=True)
logger = logging.getLogger("ncu")


def configure_logging(level: str) -> None:
    """Send log records to stderr through rich."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def format_decision(decision: UpdateDecision) -> str:
    """Format one decision as ``name: current -> latest``."""
    latest = "latest" if decision.is_equal else decision.latest_version
    return (
        f"[bold]{escape(decision.name)}[/bold]: "
        f"{escape(decision.current_version)} -> [green]{escape(latest)}[/green]"
    )


def print_report(report: UpdateReport, options: CheckOptions) -> None:
    """Print the outcome of a run."""
    if report.up_to_date:
        console.print("All dependencies are up to date!", style="green")
        return

    if options.show_all:
        console.print("Fetched all the dependencies for the project", style="yellow")
    else:
        verb = "are" if options.upgrade else "can be"
        console.print(f"The following dependencies {verb} updated:", style="yellow")

    for decision in report.decisions:
        console.print(format_decision(decision))

    if report.written:
        console.print("Dependencies upgraded successfully!", style="green")


def version_callback(value: bool) -> None:
    if value:
        console.print(f"ncu {package_version('ncu')}")
        raise typer.Exit()


app = typer.Typer(
    name="ncu",
    help="ncu - Check npm dependencies in package.json for newer versions",
    add_completion=False,
)


@app.command(epilog="Examples:\n\n  $ ncu -u\n\n  $ ncu --upgrade")
def update(
    upgrade: bool = typer.Option(False, "--upgrade", "-u", help="Upgrade outdated dependencies"),
    latest: bool = typer.Option(
        False, "--latest", "-l", help='Upgrade dependencies marked "latest" to version number'
    ),
    show_all: bool = typer.Option(False, "--show-all", help="Show all dependencies"),
    cwd: Path = typer.Option(
        Path("."), "--cwd", help="Directory containing package.json", file_okay=False
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    version: bool = typer.Option(
        False, "--version", callback=version_callback, is_eager=True, help="Show version and exit"
    ),
) -> None:
    """ncu - Check npm dependencies for newer versions and optionally upgrade them."""

    options = CheckOptions(upgrade=upgrade, latest=latest, show_all=show_all)
    try:
        settings = get_settings()
        configure_logging("DEBUG" if verbose else settings.log_level)
        resolver = NodeResolver(
            registry_url=settings.registry_url,
            timeout=settings.timeout,
            max_concurrency=settings.max_concurrency,
        )
        report = asyncio.run(
            check_for_updates(cwd, options, resolver, manifest_name=settings.manifest_name)
        )
    except NcuError as e:
        console.print(f"Error: {escape(str(e))}", style="red")
        raise typer.Exit(1)
    except Exception as e:
        logger.debug("Unexpected failure", exc_info=True)
        console.print(f"Error: {escape(str(e))}", style="red")
        raise typer.Exit(1)

    print_report(report, options)


if __name__ == "__main__":
    app()
