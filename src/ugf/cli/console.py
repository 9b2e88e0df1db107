"""Shared console utilities for CLI commands."""

from __future__ import annotations

from rich.console import Console

console = Console()


def error(msg: str) -> None:
    """Print an error message in red."""
    console.print(f"[red]{msg}[/red]")
