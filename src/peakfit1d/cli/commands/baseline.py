"""Baseline command implementation."""

from __future__ import annotations

import pathlib  # noqa: TC003
from typing import Annotated

import typer
from rich.markup import escape

from peakfit1d.cli.callbacks import baseline_method_callback
from peakfit1d.core.algorithms.preprocessing import prepare
from peakfit1d.core.baselines.estimate import estimate_baseline
from peakfit1d.core.domain.config import PeakFit1DConfig
from peakfit1d.core.shared.exceptions import PeakFit1DError
from peakfit1d.io.config import load_config
from peakfit1d.io.reader import read_xy
from peakfit1d.io.writer import write_curve
from peakfit1d.ui.console import console, print_error, print_success
from peakfit1d.ui.tables import print_summary


def baseline_command(
    data: Annotated[
        pathlib.Path,
        typer.Argument(
            help="Two-column X/Y data file",
            exists=True,
            dir_okay=False,
            resolve_path=True,
        ),
    ],
    method: Annotated[
        str | None,
        typer.Option(
            "--method",
            "-m",
            help="Baseline method: none, linear, polynomial, asls, rolling_ball, shirley, manual",
            callback=baseline_method_callback,
        ),
    ] = None,
    config: Annotated[
        pathlib.Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to TOML configuration file",
            exists=True,
            dir_okay=False,
            resolve_path=True,
        ),
    ] = None,
    output: Annotated[
        pathlib.Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Write the baseline as CSV",
            dir_okay=False,
            resolve_path=True,
        ),
    ] = None,
) -> None:
    """Estimate the baseline of a spectrum.

    Examples
    --------
      AsLS baseline written to a file:
        $ peakfit1d baseline data.txt --method asls -o baseline.csv
    """
    try:
        settings = load_config(config) if config is not None else PeakFit1DConfig()
        options = settings.baseline
        if method is not None:
            options = options.model_copy(update={"method": method})

        processed = prepare(read_xy(data), settings.processing)
        baseline = estimate_baseline(processed, options)
        if output is not None:
            write_curve(baseline, output, column="baseline")
    except PeakFit1DError as exc:
        print_error(escape(str(exc)))
        raise typer.Exit(1) from exc

    print_summary(
        {
            "Method": options.method,
            "Samples": len(baseline),
            "Baseline min": f"{baseline.y.min():.5g}" if len(baseline) else "-",
            "Baseline max": f"{baseline.y.max():.5g}" if len(baseline) else "-",
        },
        title="Baseline",
    )
    if output is not None:
        print_success(f"Baseline written to [path]{output}[/path]")
    else:
        for sample in baseline:
            console.print(f"{sample.x:.10g}\t{sample.y:.10g}", highlight=False)
