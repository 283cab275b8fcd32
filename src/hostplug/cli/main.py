"""CLI entry point for hostplug.

Invoked as::

    hostplug [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m hostplug.cli.main

Commands
--------
version     Show version information
plugins     List plugins installed through entry-points
hooks       List the lifecycle hook names plugins can rely on
"""
from __future__ import annotations

import json
import logging
import sys

import click
import yaml
from rich.console import Console
from rich.table import Table

console = Console()

_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@click.group()
@click.version_option(package_name="hostplug")
@click.option(
    "--log-level",
    type=click.Choice(_LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Logging verbosity",
)
def cli(log_level: str) -> None:
    """Attach named plugins to host objects for the length of their lifecycle."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


# ---------------------------------------------------------------------------
# version command
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from hostplug import __version__

    table = Table(show_header=False, box=None)
    table.add_row("[bold]hostplug[/bold]", f"v{__version__}")
    table.add_row("Python", f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}")
    table.add_row("Platform", sys.platform)
    console.print(table)


# ---------------------------------------------------------------------------
# plugins command
# ---------------------------------------------------------------------------


@cli.command(name="plugins")
@click.option(
    "--group",
    default="hostplug.plugins",
    show_default=True,
    help="Entry-point group to load plugins from",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json", "yaml"], case_sensitive=False),
    default="table",
    help="Output format",
)
def plugins_command(group: str, output_format: str) -> None:
    """List the plugins installed under an entry-point group."""
    from hostplug import Hooks, PluginRegistry

    registry = PluginRegistry(Hooks())
    registry.load_entrypoints(group)

    rows = [
        {"name": name, "factory": _qualified_name(registry.get_plugin_factory(name))}
        for name in registry.get_plugin_names()
    ]

    if output_format == "json":
        click.echo(json.dumps(rows, indent=2))
        return
    if output_format == "yaml":
        click.echo(yaml.dump(rows, default_flow_style=False, allow_unicode=True))
        return

    if not rows:
        console.print(f"[bold]Registered plugins ({group}):[/bold]")
        console.print("  (No plugins registered. Install a plugin package to see entries here.)")
        return

    table = Table(title=f"Registered plugins ({group})")
    table.add_column("Name", style="bold")
    table.add_column("Factory")
    for row in rows:
        table.add_row(row["name"], row["factory"])
    console.print(table)


def _qualified_name(factory: object) -> str:
    module = getattr(factory, "__module__", None)
    qualname = getattr(factory, "__qualname__", None)
    if module and qualname:
        return f"{module}:{qualname}"
    return repr(factory)


# ---------------------------------------------------------------------------
# hooks command
# ---------------------------------------------------------------------------


@cli.command(name="hooks")
def hooks_command() -> None:
    """List the lifecycle hook names known to the dispatcher."""
    from hostplug import Hooks

    table = Table(show_header=False, box=None)
    for key in Hooks.get_singleton().get_registered():
        table.add_row(key)
    console.print(table)


if __name__ == "__main__":
    cli()
