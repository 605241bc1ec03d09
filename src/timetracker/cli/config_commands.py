"""CLI commands for configuration management."""

import json
import shutil
import sys
from pathlib import Path
from typing import Any, Optional

import click  # type: ignore[import-not-found]
from rich.console import Console  # type: ignore[import-not-found]
from rich.markup import escape  # type: ignore[import-not-found]
from rich.table import Table  # type: ignore[import-not-found]

from timetracker.core.config import ConfigManager

console = Console(emoji=False)
error_console = Console(stderr=True, emoji=False)


def get_config(ctx: click.Context) -> ConfigManager:
    """Load the configuration selected by the global --config option."""
    obj = ctx.find_object(dict) or {}
    config_path: Optional[str] = obj.get("config_path")
    path = Path(config_path) if config_path else None
    try:
        return ConfigManager(path)
    except ValueError as e:
        error_console.print(f"[yellow]Warning:[/yellow] {escape(str(e))}")
    # The invalid file was replaced by defaults
    return ConfigManager(path)


def convert_value(value: str) -> Any:
    """Convert a command-line string to a boolean, null, integer or string."""
    if value.lower() in ("true", "yes"):
        return True
    if value.lower() in ("false", "no"):
        return False
    if value.lower() == "null":
        return None
    try:
        return int(value)
    except ValueError:
        return value


@click.group()  # type: ignore[misc]
def config() -> None:
    """Manage timetracker configuration.

    Configuration is stored in ~/.timetracker/config.yml
    """
    pass


@config.command("show")  # type: ignore[misc]
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")  # type: ignore[misc]
@click.pass_context  # type: ignore[misc]
def config_show(ctx: click.Context, as_json: bool) -> None:
    """Show all configuration settings.

    Example:
        timetracker config show
        timetracker config show --json
    """
    config_mgr = get_config(ctx)

    if as_json:
        print(json.dumps(config_mgr.to_dict(), indent=2))
        return

    table = Table(title="timetracker Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    for key in config_mgr.get_all_keys():
        table.add_row(key, str(config_mgr.get(key)))

    console.print(table)
    console.print(f"\nConfig file: {config_mgr.config_path}")


@config.command("get")  # type: ignore[misc]
@click.argument("key")  # type: ignore[misc]
@click.pass_context  # type: ignore[misc]
def config_get(ctx: click.Context, key: str) -> None:
    """Get a specific configuration value.

    Example:
        timetracker config get tracking.interval
    """
    config_mgr = get_config(ctx)

    if not config_mgr.has(key):
        error_console.print(f"[red]Error:[/red] Configuration key '{key}' not found")
        sys.exit(1)

    value = config_mgr.get(key)
    if isinstance(value, dict):
        console.print(json.dumps(value, indent=2))
    else:
        console.print(str(value))


@config.command("set")  # type: ignore[misc]
@click.argument("key")  # type: ignore[misc]
@click.argument("value")  # type: ignore[misc]
@click.pass_context  # type: ignore[misc]
def config_set(ctx: click.Context, key: str, value: str) -> None:
    """Set a configuration value.

    Use 'true'/'false' for booleans, 'null' to unset, numbers for integers.

    Example:
        timetracker config set tracking.interval 30
        timetracker config set tracking.rounding half_up
        timetracker config set general.database_path /data/timetracker.sqlite
    """
    config_mgr = get_config(ctx)
    converted_value = convert_value(value)

    try:
        config_mgr.set(key, converted_value)
        console.print(f"[green]✓[/green] Set {key} = {converted_value}")
    except ValueError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)


@config.command("reset")  # type: ignore[misc]
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")  # type: ignore[misc]
@click.pass_context  # type: ignore[misc]
def config_reset(ctx: click.Context, yes: bool) -> None:
    """Reset configuration to defaults.

    Example:
        timetracker config reset --yes
    """
    config_mgr = get_config(ctx)

    if not yes:
        console.print("[yellow]Warning:[/yellow] This will reset all configuration to defaults.")
        if not click.confirm("Continue?"):
            console.print("Cancelled")
            return

    backup_path = config_mgr.config_path.with_suffix(".yml.backup")
    if config_mgr.config_path.exists():
        shutil.copy(config_mgr.config_path, backup_path)
        console.print(f"Backed up current config to {backup_path}")

    config_mgr.reset()
    console.print("[green]✓[/green] Configuration reset to defaults")


@config.command("path")  # type: ignore[misc]
@click.pass_context  # type: ignore[misc]
def config_path(ctx: click.Context) -> None:
    """Show path to configuration file."""
    config_mgr = get_config(ctx)
    console.print(str(config_mgr.config_path), soft_wrap=True)
