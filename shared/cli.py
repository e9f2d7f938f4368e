"""Console helpers for the tool CLIs."""

import functools
import sys
from typing import Callable, Optional

from rich.console import Console
from rich.table import Table

from shared.logger import get_logger

console = Console()
logger = get_logger(__name__)


def info(message: str) -> None:
    console.print(f"[cyan]ℹ[/cyan] {message}")


def success(message: str) -> None:
    console.print(f"[bold green]✓[/bold green] {message}")


def warning(message: str) -> None:
    console.print(f"[bold yellow]⚠[/bold yellow] {message}")


def error(message: str) -> None:
    console.print(f"[bold red]✗[/bold red] {message}")


def create_table(title: Optional[str] = None) -> Table:
    """Create a table with the common style."""
    return Table(title=title, show_header=True, header_style="bold magenta")


def print_table(table: Table) -> None:
    console.print(table)


def handle_errors(func: Callable) -> Callable:
    """
    Turn unexpected exceptions in a command into a message and exit code.

    SystemExit raised by the command passes through untouched.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except KeyboardInterrupt:
            warning("Operation cancelled by user")
            sys.exit(130)
        except Exception as e:
            logger.debug("Unhandled error", exc_info=True)
            error(f"Unexpected error: {e}")
            sys.exit(1)

    return wrapper
