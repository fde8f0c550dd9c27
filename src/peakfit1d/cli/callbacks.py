"""Typer callbacks for CLI."""

import typer

from peakfit1d.ui.console import console


def version_callback(value: bool | None) -> None:
    """Show version information and exit."""
    if value:
        from peakfit1d import __version__

        console.print(f"peakfit1d [value]{__version__}[/value]")
        raise typer.Exit


def baseline_method_callback(value: str | None) -> str | None:
    """Reject baseline method names that are not registered."""
    from peakfit1d.core.baselines.estimate import BASELINE_ESTIMATORS

    if value is not None and value not in BASELINE_ESTIMATORS:
        msg = f"Invalid baseline method '{value}'. Valid methods: {', '.join(BASELINE_ESTIMATORS)}"
        raise typer.BadParameter(msg)
    return value
