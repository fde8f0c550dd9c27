"""Fit command implementation."""

from __future__ import annotations

import pathlib  # noqa: TC003
from typing import Annotated

import typer
from rich.markup import escape

from peakfit1d.cli.callbacks import baseline_method_callback
from peakfit1d.core.algorithms.initialization import initialize_peaks
from peakfit1d.core.algorithms.preprocessing import prepare
from peakfit1d.core.baselines.estimate import estimate_baseline
from peakfit1d.core.domain.config import PeakFit1DConfig
from peakfit1d.core.domain.peaks import Profile
from peakfit1d.core.fitting.fit import fit
from peakfit1d.core.shared.exceptions import PeakFit1DError
from peakfit1d.io.config import load_config
from peakfit1d.io.reader import read_xy
from peakfit1d.io.writer import write_result
from peakfit1d.ui.console import print_error, print_success, print_warning
from peakfit1d.ui.logging import close_logging, log, log_dict, log_section, setup_logging
from peakfit1d.ui.tables import print_fit_result


def _apply_overrides(
    settings: PeakFit1DConfig,
    *,
    peaks: int | None,
    profile: Profile | None,
    baseline: str | None,
    simultaneous: bool | None,
    max_iterations: int | None,
) -> PeakFit1DConfig:
    """Return a copy of ``settings`` with the command-line values applied."""
    fitting_updates: dict[str, object] = {}
    if peaks is not None:
        fitting_updates["n_peaks"] = peaks
    if profile is not None:
        fitting_updates["profile"] = profile
    if max_iterations is not None:
        fitting_updates["max_iterations"] = max_iterations

    baseline_updates: dict[str, object] = {}
    if baseline is not None:
        baseline_updates["method"] = baseline
    if simultaneous is not None:
        baseline_updates["optimize_simultaneously"] = simultaneous

    return settings.model_copy(
        update={
            "fitting": settings.fitting.model_copy(update=fitting_updates),
            "baseline": settings.baseline.model_copy(update=baseline_updates),
        }
    )


def fit_command(
    data: Annotated[
        pathlib.Path,
        typer.Argument(
            help="Two-column X/Y data file",
            exists=True,
            dir_okay=False,
            resolve_path=True,
        ),
    ],
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
    peaks: Annotated[
        int | None,
        typer.Option(
            "--peaks",
            "-n",
            help="Number of peaks to fit",
            min=1,
        ),
    ] = None,
    profile: Annotated[
        Profile | None,
        typer.Option(
            "--profile",
            "-p",
            help="Peak profile: gaussian, lorentzian, voigt",
        ),
    ] = None,
    baseline: Annotated[
        str | None,
        typer.Option(
            "--baseline",
            "-b",
            help="Baseline method: none, linear, polynomial, asls, rolling_ball, shirley, manual",
            callback=baseline_method_callback,
        ),
    ] = None,
    simultaneous: Annotated[
        bool | None,
        typer.Option(
            "--simultaneous/--sequential",
            help="Co-optimise baseline parameters with the peaks",
        ),
    ] = None,
    max_iterations: Annotated[
        int | None,
        typer.Option(
            "--max-iterations",
            help="Maximum Levenberg-Marquardt iterations",
            min=1,
        ),
    ] = None,
    output: Annotated[
        pathlib.Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Write results to a .json or .csv file",
            dir_okay=False,
            resolve_path=True,
        ),
    ] = None,
    log_file: Annotated[
        pathlib.Path | None,
        typer.Option(
            "--log-file",
            help="Write a session log (.log text or .json records)",
            dir_okay=False,
            resolve_path=True,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Echo log records to the console",
        ),
    ] = False,
) -> None:
    """Fit peaks to a one-dimensional spectrum.

    The data are preprocessed, the baseline estimated, initial peaks placed
    on the most prominent maxima and the model refined by Levenberg-Marquardt.

    Examples
    --------
    Two Gaussians over a linear background:
        $ peakfit1d fit data.txt -n 2 --baseline linear

    Co-optimised Shirley background, results to JSON:
        $ peakfit1d fit xps.txt -p voigt -b shirley --simultaneous -o fit.json

    Using a configuration file:
        $ peakfit1d fit data.txt --config peakfit1d.toml
    """
    setup_logging(log_file, verbose)
    try:
        settings = load_config(config) if config is not None else PeakFit1DConfig()
        settings = _apply_overrides(
            settings,
            peaks=peaks,
            profile=profile,
            baseline=baseline,
            simultaneous=simultaneous,
            max_iterations=max_iterations,
        )
        log_section("Configuration")
        log_dict(settings.model_dump(exclude_none=True))

        raw = read_xy(data)
        processed = prepare(raw, settings.processing)
        log_section("Data")
        log_dict({"file": data, "raw samples": len(raw), "processed samples": len(processed)})

        background = estimate_baseline(processed, settings.baseline)
        corrected = processed.with_y(processed.y - background.y)
        components = initialize_peaks(
            corrected,
            settings.fitting.n_peaks,
            settings.fitting.profile,
            settings.fitting.initializer,
        )

        log_section("Fit")
        result = fit(
            processed,
            components,
            background,
            settings.baseline,
            max_iterations=settings.fitting.max_iterations,
            tolerance=settings.fitting.tolerance,
        )
        log_dict(result.statistics.to_dict())

        print_fit_result(result)
        if not result.converged:
            log("Optimizer stopped without meeting the tolerance", level="warning")
            print_warning("The optimizer did not converge; inspect the residuals")

        if output is not None:
            write_result(result, output, raw)
            print_success(f"Results written to [path]{output}[/path]")
    except PeakFit1DError as exc:
        print_error(escape(str(exc)))
        raise typer.Exit(1) from exc
    finally:
        close_logging()
