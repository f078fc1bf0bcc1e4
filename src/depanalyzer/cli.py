"""Depanalyzer CLI entry point."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click

from depanalyzer import __version__

EXIT_VIOLATIONS = 1
EXIT_CONFIG_ERROR = 2
EXIT_INTERNAL_ERROR = 3


def _configure_logging(*, verbose: bool, quiet: bool) -> None:
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


_config_option = click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: ./depanalyzer.yml).",
)


@click.group()
@click.version_option(version=__version__, prog_name="depanalyzer")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Minimal output (errors only).")
def main(*, verbose: bool, quiet: bool) -> None:
    """Depanalyzer - enforce architecture rules over a class dependency graph."""
    _configure_logging(verbose=verbose, quiet=quiet)


@main.command()
@click.argument("facts", type=click.Path(dir_okay=False, path_type=Path))
@_config_option
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["rich", "json", "porcelain"]),
    default=None,
    help="Output format (default: rich if TTY, porcelain if piped).",
)
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Exit 1 if violations found.",
)
def verify(*, facts: Path, config_path: Path | None, fmt: str | None, strict: bool) -> None:
    """Check the dependency facts in FACTS against the configured rules.

    Exit codes: 0 = clean or violations without --strict,
    1 = violations with --strict, 2 = configuration or input error,
    3 = internal error.
    """
    from depanalyzer.analyzer import format_json, format_porcelain, format_rich
    from depanalyzer.analyzer import verify as run_verify
    from depanalyzer.config import resolve_config_path
    from depanalyzer.errors import DependencyAnalyzerError, ShouldNotHappenError

    if fmt is None:
        fmt = "rich" if sys.stdout.isatty() else "porcelain"

    try:
        result = run_verify(resolve_config_path(config_path), facts)
    except DependencyAnalyzerError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(EXIT_CONFIG_ERROR)
    except ShouldNotHappenError as exc:
        click.echo(f"Internal error: {exc}", err=True)
        sys.exit(EXIT_INTERNAL_ERROR)

    formatters = {
        "rich": format_rich,
        "json": format_json,
        "porcelain": format_porcelain,
    }
    output = formatters[fmt](result)
    if output:
        click.echo(output)

    if strict and result.violations:
        sys.exit(EXIT_VIOLATIONS)


@main.command()
@click.argument("facts", type=click.Path(dir_okay=False, path_type=Path))
def graph(*, facts: Path) -> None:
    """Print the dependency graph built from FACTS as JSON."""
    from depanalyzer.dumper.facts import load_graph
    from depanalyzer.errors import DependencyAnalyzerError

    try:
        dependency_graph = load_graph(facts)
    except DependencyAnalyzerError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(EXIT_CONFIG_ERROR)

    click.echo(json.dumps(dependency_graph.to_dict(), indent=2))


@main.command()
@_config_option
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format.",
)
def rules(*, config_path: Path | None, fmt: str) -> None:
    """Show the configured rules with component references expanded."""
    from depanalyzer.analyzer import load_rules
    from depanalyzer.config import resolve_config_path
    from depanalyzer.errors import DependencyAnalyzerError

    try:
        loaded = load_rules(resolve_config_path(config_path))
    except DependencyAnalyzerError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(EXIT_CONFIG_ERROR)

    if fmt == "json":
        merged: dict[str, object] = {}
        for rule in loaded:
            merged.update(rule.to_dict())
        click.echo(json.dumps(merged, indent=2))
        return

    from rich.console import Console
    from rich.table import Table
    from rich.text import Text

    console = Console()
    for rule in loaded:
        table = Table(title=rule.name)
        table.add_column("Component", style="bold")
        table.add_column("Kind")
        table.add_column("Include")
        table.add_column("Exclude")
        for component_name, data in rule.to_dict()[rule.name].items():
            for kind in ("define", "depender", "dependee"):
                if kind not in data:
                    continue
                table.add_row(
                    component_name,
                    kind,
                    Text("\n".join(data[kind]["include"]) or "-"),
                    Text("\n".join(data[kind]["exclude"]) or "-"),
                )
        console.print(table)
