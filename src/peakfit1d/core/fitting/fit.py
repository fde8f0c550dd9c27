"""Fit orchestration: model assembly, optimisation and statistics.

Two modes are supported:

* Sequential (default): the supplied baseline is subtracted once and only
  the peak parameters are optimised against the corrected data.
* Simultaneous: with ``optimize_simultaneously`` set and a method that has
  a parameterisation, baseline parameters join the vector and the model
  returns ``peaks + baseline`` against the raw data.
"""

from __future__ import annotations

import logging
from functools import partial
from typing import TYPE_CHECKING

import numpy as np

from peakfit1d.core.domain.spectrum import Spectrum
from peakfit1d.core.fitting.model import CombinedModel, PeakSumModel
from peakfit1d.core.fitting.optimizer import LMOptions, optimize
from peakfit1d.core.fitting.parameters import (
    baseline_term,
    clamp_peak_parameters,
    pack_components,
    unpack_components,
)
from peakfit1d.core.lineshapes.functions import evaluate_component
from peakfit1d.core.results.fit_results import FitResult
from peakfit1d.core.results.statistics import FitStatistics
from peakfit1d.core.shared.exceptions import InvalidInputError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from peakfit1d.core.domain.config import BaselineOptions
    from peakfit1d.core.domain.peaks import PeakComponent
    from peakfit1d.core.shared.typing import FloatArray

logger = logging.getLogger(__name__)


def _baseline_values(
    spectrum: Spectrum,
    baseline: Spectrum | FloatArray | Sequence[float] | None,
) -> FloatArray:
    """Baseline y values aligned with ``spectrum``; zeros when none is given."""
    if baseline is None:
        return np.zeros_like(spectrum.y)
    values = baseline.y if isinstance(baseline, Spectrum) else np.asarray(baseline, dtype=float)
    if values.size == 0:
        return np.zeros_like(spectrum.y)
    if values.shape != spectrum.y.shape:
        msg = f"Baseline has {values.size} values but the spectrum has {len(spectrum)} samples"
        raise InvalidInputError(msg)
    return values


def fit(
    spectrum: Spectrum,
    components: Sequence[PeakComponent],
    baseline: Spectrum | FloatArray | Sequence[float] | None = None,
    baseline_options: BaselineOptions | None = None,
    max_iterations: int = 200,
    tolerance: float = 1e-8,
) -> FitResult:
    """Fit a sum of peaks (and optionally the baseline) to ``spectrum``.

    Args:
        spectrum: Processed dataset
        components: Initial peak components
        baseline: Pre-computed baseline aligned with ``spectrum`` by index
        baseline_options: Baseline settings; enables co-optimisation when
            ``optimize_simultaneously`` is set
        max_iterations: Optimizer iteration limit
        tolerance: Relative chi-squared improvement counted as converged

    Returns
    -------
        FitResult. Empty data or an empty component list give an empty
        result with ``converged=False``.

    Raises
    ------
        InvalidInputError: If ``baseline`` does not match the spectrum length
    """
    components = tuple(components)
    if spectrum.is_empty or not components:
        logger.info("Nothing to fit (%d samples, %d components)", len(spectrum), len(components))
        return FitResult.empty(components)

    x, y = spectrum.x, spectrum.y
    baseline_y = _baseline_values(spectrum, baseline)

    peaks = PeakSumModel([c.profile for c in components])
    term = baseline_term(baseline_options)
    initial = pack_components(components)
    constrain = partial(clamp_peak_parameters, n_components=len(components))
    lm_options = LMOptions(max_iterations=max_iterations, tolerance=tolerance)
    optimized_baseline = None
    baseline_params = None

    if term is None:
        logger.debug("Sequential fit of %d peaks on %d samples", len(components), len(spectrum))
        result = optimize(x, y - baseline_y, initial, peaks, lm_options, constrain)
        n_params = peaks.n_params
    else:
        logger.debug(
            "Simultaneous fit of %d peaks with a %s baseline (%d parameters)",
            len(components),
            term.method,
            term.size,
        )
        assert baseline_options is not None
        model = CombinedModel(peaks, term, y)
        initial = np.concatenate([initial, term.initial(baseline_options)])
        result = optimize(x, y, initial, model, lm_options, constrain)
        n_params = peaks.n_params + term.size

        params = constrain(result.params)
        baseline_y = model.baseline(x, params, final=True)
        optimized_baseline = spectrum.with_y(baseline_y)
        baseline_params = term.describe(params[peaks.n_params :])

    fitted_components = unpack_components(result.params, components)

    component_curves = tuple(
        spectrum.with_y(evaluate_component(x, component)) for component in fitted_components
    )
    fitted_y = np.sum([curve.y for curve in component_curves], axis=0)
    corrected_y = y - baseline_y

    statistics = FitStatistics.compute(y, corrected_y, fitted_y, result.chi_squared, n_params)
    logger.info(
        "Fit finished: R2=%.6f chi2=%.6g iterations=%d converged=%s",
        statistics.r_squared,
        statistics.chi_squared,
        result.iterations,
        result.converged,
    )

    return FitResult(
        fitted=spectrum.with_y(fitted_y),
        residuals=spectrum.with_y(corrected_y - fitted_y),
        components=component_curves,
        baseline=spectrum.with_y(baseline_y),
        corrected=spectrum.with_y(corrected_y),
        statistics=statistics,
        parameters=tuple(fitted_components),
        iterations=result.iterations,
        converged=result.converged,
        optimized_baseline=optimized_baseline,
        baseline_params=baseline_params,
    )
