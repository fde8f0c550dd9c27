"""Console and theme shared by the command-line interface."""

from rich.console import Console
from rich.theme import Theme

PEAKFIT1D_THEME = Theme(
    {
        # --- Status ---
        "success": "bold green",
        "warning": "bold yellow",
        "error": "bold red",
        "info": "cyan",
        "neutral": "dim white",
        # --- Structure ---
        "header": "bold cyan",
        "panel.border": "blue",
        # --- Values ---
        "key": "cyan",
        "value": "green",
        "metric": "bold green",
        "path": "blue underline",
        "dim": "dim",
    }
)

console = Console(theme=PEAKFIT1D_THEME)


def print_success(message: str) -> None:
    console.print(f"[success]✓[/success] {message}")


def print_warning(message: str) -> None:
    console.print(f"[warning]⚠[/warning] {message}")


def print_error(message: str) -> None:
    console.print(f"[error]✗[/error] {message}")


__all__ = [
    "PEAKFIT1D_THEME",
    "console",
    "print_error",
    "print_success",
    "print_warning",
]
