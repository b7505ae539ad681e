"""Shared Rich console instances for CLI output."""

from rich.console import Console

console = Console()

# Diagnostics and log records go to stderr so stdout stays scriptable
err_console = Console(stderr=True)

__all__ = ["console", "err_console"]
