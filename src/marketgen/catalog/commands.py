"""Catalog CLI Commands for marketgen.

- generate  - regenerate marketplace.json (default when no command is given)
- check     - report whether marketplace.json is stale, without writing
- list      - show the plugin entries that would be generated
- status    - show the catalog currently on disk
"""

from __future__ import annotations

import argparse

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..config import Settings
from ..errors import MarketgenError
from .sync import generate_catalog, get_catalog_status, list_entries, sorted_entries

console = Console()

_EVENT_STYLES = {
    "info": "",
    "warning": "yellow",
    "success": "green",
}


def _settings_from_args(args: argparse.Namespace) -> Settings:
    return Settings.load(
        repo_root=getattr(args, "root", None),
        catalog_path=getattr(args, "catalog", None),
    )


def _print_event(level: str, message: str) -> None:
    style = _EVENT_STYLES.get(level, "")
    if style:
        console.print(f"[{style}]{escape(message)}[/{style}]", highlight=False)
    else:
        console.print(escape(message), highlight=False)


def _quiet_event(level: str, message: str) -> None:
    if level == "warning":
        _print_event(level, message)


def _error(e: MarketgenError) -> int:
    console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
    return 1


# --- Generation Commands ---

def cmd_generate(args: argparse.Namespace) -> int:
    """Regenerate marketplace.json from plugin manifests."""
    try:
        settings = _settings_from_args(args)
        generate_catalog(
            settings,
            workers=getattr(args, "workers", 1),
            on_event=_quiet_event if getattr(args, "quiet", False) else _print_event,
        )
    except MarketgenError as e:
        return _error(e)
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    """Exit non-zero when marketplace.json is out of date."""
    try:
        settings = _settings_from_args(args)
        result = generate_catalog(
            settings,
            dry_run=True,
            workers=getattr(args, "workers", 1),
            on_event=_quiet_event,
        )
    except MarketgenError as e:
        return _error(e)

    if result.changed:
        console.print(
            f"[red]{escape(str(result.catalog_path))} is out of date.[/red] "
            "Run [bold]marketgen generate[/bold] to update it."
        )
        return 1

    console.print(
        f"[green]{escape(str(result.catalog_path))} is up to date[/green] "
        f"(version {escape(str(result.old_version))})"
    )
    return 0


# --- Inspection Commands ---

def cmd_list(args: argparse.Namespace) -> int:
    """List discovered plugins."""
    try:
        settings = _settings_from_args(args)
        normalized = list_entries(settings, workers=getattr(args, "workers", 1))
    except MarketgenError as e:
        return _error(e)

    for warning in normalized.warnings:
        _print_event("warning", str(warning))

    table = Table(title="Plugins")
    table.add_column("Name", style="cyan")
    table.add_column("Version")
    table.add_column("Source", style="magenta")
    table.add_column("Description")

    entries = sorted_entries(normalized.entries)
    for entry in entries:
        table.add_row(
            escape(str(entry.name)),
            escape(str(entry.version or "")),
            escape(entry.source),
            escape(str(entry.description or "")),
        )

    console.print(table)
    console.print(f"\n[bold]Total:[/bold] {len(entries)} plugin(s), {len(normalized.skipped)} skipped")
    return 0


def cmd_status(args: argparse.Namespace) -> int:
    """Show the persisted catalog."""
    try:
        settings = _settings_from_args(args)
        status = get_catalog_status(settings)
    except MarketgenError as e:
        return _error(e)

    name = escape(str(status["name"])) if status["name"] else "[dim]unnamed[/dim]"
    version = escape(str(status["version"])) if status["version"] else "[dim]none[/dim]"
    lines = [
        f"[bold]Catalog:[/bold] {name}",
        f"[bold]Path:[/bold] {escape(str(status['path']))}",
        f"[bold]Version:[/bold] {version}",
        f"[bold]Plugins:[/bold] {status['plugin_count']}",
    ]
    console.print(Panel("\n".join(lines), title="Marketplace Status", border_style="cyan"))
    return 0


# --- Parser Setup ---

def add_catalog_commands(subparsers: argparse._SubParsersAction) -> None:
    """Add catalog commands to the main parser."""

    p_generate = subparsers.add_parser("generate", help="Regenerate marketplace.json")
    p_generate.set_defaults(func=cmd_generate)

    p_check = subparsers.add_parser("check", help="Fail if marketplace.json is out of date")
    p_check.set_defaults(func=cmd_check)

    p_list = subparsers.add_parser("list", help="List discovered plugins")
    p_list.set_defaults(func=cmd_list)

    p_status = subparsers.add_parser("status", help="Show the current catalog")
    p_status.set_defaults(func=cmd_status)


def run_catalog_command(args: argparse.Namespace) -> int:
    """Run the selected command, defaulting to generate."""
    func = getattr(args, "func", None) or cmd_generate
    return func(args)
