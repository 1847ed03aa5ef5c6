"""Shared utility functions for create-tauri-ui.

Provides package-manager detection, logging setup and Rich-based console
output used by the CLI.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from create_tauri_ui.config import PackageManager

console = Console()

# ---------------------------------------------------------------------------
# Package manager detection
# ---------------------------------------------------------------------------


def detect_package_manager(user_agent: str | None) -> PackageManager:
    """Infer the package manager from an ``npm_config_user_agent`` string.

    Examples::

        detect_package_manager("pnpm/8.6.0 npm/? node/v18.16.0 linux x64") -> PNPM
        detect_package_manager("yarn/1.22.19 npm/? node/v18.16.0")        -> YARN
        detect_package_manager(None)                                      -> NPM
    """
    if not user_agent:
        return PackageManager.NPM
    name = user_agent.split(" ", 1)[0].split("/", 1)[0].strip().lower()
    try:
        return PackageManager(name)
    except ValueError:
        return PackageManager.NPM


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


def configure_logging(verbose: bool = False) -> None:
    """Route ``create_tauri_ui`` log records through a Rich handler."""
    handler = RichHandler(console=console, show_path=False, show_time=False)
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger("create_tauri_ui")
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")
