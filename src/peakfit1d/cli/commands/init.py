"""Init command implementation."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from peakfit1d.io.config import generate_default_config
from peakfit1d.ui.console import console, print_error, print_success


def init_command(
    path: Annotated[
        Path,
        typer.Argument(
            help="Path for new configuration file",
            dir_okay=False,
            resolve_path=True,
        ),
    ] = Path("peakfit1d.toml"),
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Overwrite existing file",
        ),
    ] = False,
) -> None:
    """Generate a default configuration file.

    Examples
    --------
      Create default config:
        $ peakfit1d init

      Overwrite existing config:
        $ peakfit1d init my_fit.toml --force
    """
    if path.exists() and not force:
        print_error(f"File already exists: [path]{path}[/path]")
        console.print("Use [key]--force[/key] to overwrite")
        raise typer.Exit(1)

    path.write_text(generate_default_config(), encoding="utf-8")
    print_success(f"Created configuration file: [path]{path}[/path]")
    console.print(f"Run a fit with: [key]peakfit1d fit data.txt --config {path}[/key]")
