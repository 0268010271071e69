"""Shared utilities for CLI commands."""

from datetime import datetime

from rich.console import Console

console = Console()


def format_day(value: datetime) -> str:
    """Render a date as ``05 Jan 2025``."""
    return value.strftime("%d %b %Y")
