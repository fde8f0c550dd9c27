"""Rich tables for fit summaries."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich import box
from rich.table import Table

from peakfit1d.ui.console import console

if TYPE_CHECKING:
    from peakfit1d.core.results.fit_results import FitResult

__all__ = [
    "create_table",
    "fit_statistics_table",
    "parameters_table",
    "print_fit_result",
    "print_summary",
]


def create_table(title: str | None = None, show_header: bool = True) -> Table:
    """Create a table with the shared styling."""
    return Table(
        title=title,
        title_style="header" if title else None,
        box=box.ROUNDED,
        show_header=show_header,
        header_style="bold cyan",
        border_style="dim",
    )


def print_summary(items: dict[str, Any], title: str = "Summary") -> None:
    """Print a two-column key/value table."""
    table = create_table(title, show_header=False)
    table.add_column("Item", style="key")
    table.add_column("Value", style="value")
    for key, value in items.items():
        table.add_row(key, str(value))
    console.print(table)


def fit_statistics_table(result: FitResult) -> Table:
    stats = result.statistics
    table = create_table("Fit Statistics", show_header=False)
    table.add_column("Metric", style="key")
    table.add_column("Value", style="metric", justify="right")

    status = "[success]yes[/success]" if result.converged else "[warning]no[/warning]"
    table.add_row("Converged", status)
    table.add_row("Iterations", str(result.iterations))
    table.add_row("R²", f"{stats.r_squared:.6f}")
    table.add_row("Adjusted R²", f"{stats.adjusted_r_squared:.6f}")
    table.add_row("RMSE", f"{stats.rmse:.4g}")
    table.add_row("χ²", f"{stats.chi_squared:.4g}")
    table.add_row("Reduced χ²", f"{stats.reduced_chi_squared:.4g}")
    table.add_row("AIC", f"{stats.aic:.2f}")
    table.add_row("BIC", f"{stats.bic:.2f}")
    return table


def parameters_table(result: FitResult) -> Table:
    """Fitted peak parameters, one row per component."""
    table = create_table("Fitted Peaks")
    table.add_column("#", justify="right")
    table.add_column("Profile")
    table.add_column("Center", justify="right", style="value")
    table.add_column("Amplitude", justify="right", style="value")
    table.add_column("FWHM", justify="right", style="value")
    for component in result.parameters:
        table.add_row(
            str(component.id),
            component.profile.value,
            f"{component.center:.5g}",
            f"{component.amplitude:.5g}",
            f"{component.width:.5g}",
        )
    return table


def print_fit_result(result: FitResult) -> None:
    """Print statistics, fitted peaks and co-optimised baseline parameters."""
    console.print(fit_statistics_table(result))
    console.print(parameters_table(result))
    if result.baseline_params:
        print_summary(result.baseline_params, title="Baseline Parameters")
