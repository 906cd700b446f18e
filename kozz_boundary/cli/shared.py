"""Shared utilities for kozz-boundary CLI commands."""

from rich.console import Console

console = Console()
