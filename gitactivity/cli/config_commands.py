# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
CLI commands for managing GitActivity CLI configuration.

Users can configure:
- GitHub token
- Default organization
- Default report window (days)
"""

import json
import os
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from gitactivity.config import GITHUB_TOKEN_ENV
from gitactivity.utils.utils import mask_secret

# Config file location
GITACTIVITY_DIR = Path.home() / '.gitactivity'
CONFIG_FILE = GITACTIVITY_DIR / 'config.json'

CONFIG_KEYS = ('token', 'organization', 'days')
SECRET_KEYS = ('token',)

console = Console()


def load_config() -> dict:
    """Load configuration from file."""
    if not CONFIG_FILE.exists():
        return {}
    try:
        with open(CONFIG_FILE, 'r') as f:
            return json.load(f)
    except (json.JSONDecodeError, IOError):
        return {}


def save_config(config: dict) -> bool:
    """Save configuration to file."""
    GITACTIVITY_DIR.mkdir(parents=True, exist_ok=True)
    try:
        with open(CONFIG_FILE, 'w') as f:
            json.dump(config, f, indent=2)
        return True
    except IOError as e:
        console.print(f'[red]Failed to save config: {e}[/red]')
        return False


def get_config_value(key: str, default=None):
    """Get a config value with optional default."""
    return load_config().get(key, default)


def resolve_token(token: Optional[str]) -> Optional[str]:
    """Token from the command line, then the environment, then the config file."""
    return token or os.getenv(GITHUB_TOKEN_ENV) or get_config_value('token')


@click.group(name='config', invoke_without_command=True)
@click.pass_context
def config(ctx):
    """Manage CLI configuration.

    \b
    Examples:
        gitactivity config                          # Show current config
        gitactivity config set organization my-org  # Set default organization
        gitactivity config set days 14              # Set default window
    """
    if ctx.invoked_subcommand is None:
        show_config()


def show_config():
    """Display current configuration."""
    current = load_config()

    if not current:
        console.print('\n[yellow]No configuration set.[/yellow]')
        console.print('[dim]Use "gitactivity config set <key> <value>" to set values.[/dim]')
        console.print(f'\n[dim]Available keys: {", ".join(CONFIG_KEYS)}[/dim]')
        return

    console.print('\n[bold cyan]GitActivity CLI Configuration[/bold cyan]\n')

    table = Table(show_header=True, header_style='bold magenta')
    table.add_column('Setting', style='cyan')
    table.add_column('Value', style='green')

    for key, value in sorted(current.items()):
        table.add_row(key, mask_secret(value) if key in SECRET_KEYS else str(value))

    console.print(table)
    console.print(f'\n[dim]Config file: {CONFIG_FILE}[/dim]')


@config.command('set')
@click.argument('key', type=click.Choice(CONFIG_KEYS))
@click.argument('value', type=str)
def config_set(key: str, value: str):
    """Set a configuration value.

    \b
    Examples:
        gitactivity config set token ghp_xxx
        gitactivity config set organization my-org
        gitactivity config set days 7
    """
    stored = value
    if key == 'days':
        try:
            stored = int(value)
        except ValueError:
            raise click.BadParameter(f'days must be an integer (got {value})', param_hint='VALUE')
        if stored <= 0:
            raise click.BadParameter(f'days must be positive (got {value})', param_hint='VALUE')

    current = load_config()
    old_value = current.get(key)
    current[key] = stored

    if not save_config(current):
        return

    shown = mask_secret(value) if key in SECRET_KEYS else value
    if old_value is not None:
        console.print(f'[green]Updated {key}:[/green] {shown}')
    else:
        console.print(f'[green]Set {key}:[/green] {shown}')
