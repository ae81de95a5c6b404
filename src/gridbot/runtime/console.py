"""Rich console utilities for the gridbot CLI."""

from collections.abc import Sequence
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

# Shared console instances
console = Console()
error_console = Console(stderr=True)


def print_header(title: str, subtitle: str | None = None) -> None:
    """Print a styled header panel."""
    content = Text(title, style="bold blue")
    if subtitle:
        content.append(f"\n{subtitle}", style="dim")
    console.print(Panel(content, expand=False))


def print_error(message: str, hint: str | None = None) -> None:
    """Print formatted error message to stderr."""
    content = Text(f"ERROR: {message}", style="bold red")
    if hint:
        content.append(f"\n\nHint: {hint}", style="yellow")
    error_console.print(Panel(content, title="Error", border_style="red"))


def print_success(message: str) -> None:
    console.print(Panel(message, title="Success", border_style="green"))


def print_commands(names: Sequence[str], descriptions: dict[str, str]) -> None:
    """Print registered commands with their usage lines."""
    table = Table(title="Commands", show_header=True)
    table.add_column("Name", style="cyan")
    table.add_column("Usage")
    for name in names:
        table.add_row(name, descriptions.get(name, ""))
    console.print(table)


def print_cache_stats(stats: dict[str, Any], health: dict[str, Any] | None = None) -> None:
    """Print cache statistics as a key/value table."""
    table = Table(title="Cache", show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value")

    if health is not None:
        style = "green" if health.get("available") else "red"
        table.add_row("Status", Text(str(health.get("status")), style=style))
    table.add_row("Namespace", str(stats.get("namespace")))
    table.add_row("TTL", f"{stats.get('ttl')}s")
    table.add_row("Total keys", str(stats.get("total_keys", 0)))
    for key_type, count in stats.get("keys_by_type", {}).items():
        table.add_row(f"  {key_type}", str(count))
    table.add_row("Hits", str(stats.get("hits", 0)))
    table.add_row("Misses", str(stats.get("misses", 0)))
    table.add_row("Hit rate", f"{stats.get('hit_rate', 0.0):.1%}")
    for key, value in stats.get("backend", {}).items():
        table.add_row(key, str(value))
    if "error" in stats:
        table.add_row("Error", Text(str(stats["error"]), style="red"))

    console.print(table)


def print_scenario(name: str, commands: Sequence[str], outputs: Sequence[str]) -> None:
    """Print one scenario's input and output side by side."""
    table = Table(show_header=True, box=None)
    table.add_column("Input", style="cyan")
    table.add_column("Output", style="green")
    table.add_row("\n".join(commands), "\n".join(outputs) or "(no output)")
    console.print(Panel(table, title=name, expand=False))
