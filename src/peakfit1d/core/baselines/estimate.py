"""Baseline dispatch: run the configured estimator, optionally on a sub-range."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from peakfit1d.core.baselines.asls import asls_baseline
from peakfit1d.core.baselines.linear import linear_baseline
from peakfit1d.core.baselines.manual import manual_baseline
from peakfit1d.core.baselines.polynomial import evaluate_polynomial, polynomial_baseline
from peakfit1d.core.baselines.rolling_ball import rolling_ball_baseline
from peakfit1d.core.baselines.shirley import shirley_baseline
from peakfit1d.core.domain.config import BaselineOptions
from peakfit1d.core.domain.spectrum import Spectrum
from peakfit1d.core.shared.exceptions import InvalidInputError

if TYPE_CHECKING:
    from collections.abc import Callable

    Estimator = Callable[[Spectrum, BaselineOptions], Spectrum]

logger = logging.getLogger(__name__)


def _none(spectrum: Spectrum, options: BaselineOptions) -> Spectrum:
    return Spectrum.zeros_like(spectrum)


def _linear(spectrum: Spectrum, options: BaselineOptions) -> Spectrum:
    if options.auto_baseline:
        return linear_baseline(spectrum)
    return linear_baseline(spectrum, options.slope, options.intercept)


def _polynomial(spectrum: Spectrum, options: BaselineOptions) -> Spectrum:
    if not options.auto_baseline and options.coeffs:
        return spectrum.with_y(evaluate_polynomial(spectrum.x, options.coeffs))
    return polynomial_baseline(spectrum, options.degree)


def _asls(spectrum: Spectrum, options: BaselineOptions) -> Spectrum:
    return asls_baseline(spectrum, options.lam, options.p)


def _rolling_ball(spectrum: Spectrum, options: BaselineOptions) -> Spectrum:
    return rolling_ball_baseline(spectrum, options.radius)


def _shirley(spectrum: Spectrum, options: BaselineOptions) -> Spectrum:
    return shirley_baseline(spectrum, options.shirley_iterations, options.shirley_tolerance)


def _manual(spectrum: Spectrum, options: BaselineOptions) -> Spectrum:
    return manual_baseline(spectrum, options.manual_points, options.manual_interp)


BASELINE_ESTIMATORS: dict[str, Estimator] = {
    "none": _none,
    "linear": _linear,
    "polynomial": _polynomial,
    "asls": _asls,
    "rolling_ball": _rolling_ball,
    "shirley": _shirley,
    "manual": _manual,
}


def restrict_to_range(
    spectrum: Spectrum,
    x_min: float | None,
    x_max: float | None,
) -> tuple[Spectrum, np.ndarray] | None:
    """Return the samples inside ``[x_min, x_max]`` and their indices.

    ``None`` when fewer than two samples fall inside the range.
    """
    lower = -np.inf if x_min is None else x_min
    upper = np.inf if x_max is None else x_max
    indices = np.flatnonzero((spectrum.x >= lower) & (spectrum.x <= upper))
    if indices.size < 2:
        return None
    return Spectrum(spectrum.x[indices], spectrum.y[indices]), indices


def extend_flat(spectrum: Spectrum, partial: Spectrum, indices: np.ndarray) -> Spectrum:
    """Place a sub-range baseline on the full grid, held constant beyond its ends."""
    values = np.empty_like(spectrum.y)
    values[indices] = partial.y
    values[: indices[0]] = partial.y[0]
    values[indices[-1] + 1 :] = partial.y[-1]
    return spectrum.with_y(values)


def estimate_baseline(spectrum: Spectrum, options: BaselineOptions | None = None) -> Spectrum:
    """Estimate the background of ``spectrum``.

    Args:
        spectrum: Dataset sorted by x
        options: Baseline method and parameters; defaults to no baseline

    Returns
    -------
        Baseline curve aligned index-for-index with ``spectrum``

    Raises
    ------
        InvalidInputError: If the method is unknown
    """
    options = options or BaselineOptions()
    try:
        estimator = BASELINE_ESTIMATORS[options.method]
    except KeyError:
        msg = f"Unknown baseline method '{options.method}'"
        raise InvalidInputError(msg) from None

    if spectrum.is_empty:
        return Spectrum.zeros_like(spectrum)

    if options.has_calc_range:
        restricted = restrict_to_range(spectrum, options.calc_range_min, options.calc_range_max)
        if restricted is not None:
            partial, indices = restricted
            logger.debug(
                "Computing %s baseline on %d of %d samples",
                options.method,
                indices.size,
                len(spectrum),
            )
            return extend_flat(spectrum, estimator(partial, options), indices)

    return estimator(spectrum, options)
