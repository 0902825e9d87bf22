"""Shared Rich console for CLI output."""

import json
import os
from functools import wraps

from rich.console import Console

_console = Console()
_error_console = Console(stderr=True)


def _should_print() -> bool:
    """Check if console output is enabled."""
    return os.environ.get("LOG_CONSOLE_ENABLED", "true").lower() == "true"


def _console_output(func):
    """Decorator to check if console output is enabled."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        if _should_print():
            return func(*args, **kwargs)

    return wrapper


@_console_output
def print_success(message: str):
    """Print success message."""
    _console.print(f"[green]{message}[/green]", highlight=False)


@_console_output
def print_error(message: str):
    """Print error message to stderr."""
    _error_console.print(f"[red]{message}[/red]", highlight=False)


@_console_output
def print_info(message: str):
    """Print info message."""
    _console.print(f"[cyan]{message}[/cyan]", highlight=False)


def print_json(data: dict):
    """Print JSON data (always outputs, ignores LOG_CONSOLE_ENABLED)."""
    print(json.dumps(data, indent=2))
