"""Main Typer application for peakfit1d."""

from typing import Annotated

import typer

from peakfit1d.cli.callbacks import version_callback
from peakfit1d.cli.commands import baseline_command, fit_command, init_command

app = typer.Typer(
    name="peakfit1d",
    help="peakfit1d - Peak fitting for one-dimensional spectra",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """peakfit1d - Fit Gaussian, Lorentzian and pseudo-Voigt peaks with baselines.

    Preprocess X/Y data, estimate backgrounds and fit peak sums by
    Levenberg-Marquardt.
    """


app.command(name="fit")(fit_command)
app.command(name="baseline")(baseline_command)
app.command(name="init")(init_command)
