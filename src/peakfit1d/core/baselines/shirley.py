"""Iterative Shirley background for step-like spectra (XPS)."""

from __future__ import annotations

import logging

import numpy as np

from peakfit1d.core.domain.spectrum import Spectrum

logger = logging.getLogger(__name__)

DEFAULT_MAX_ITERATIONS = 50
DEFAULT_TOLERANCE = 1e-5


def shirley_baseline(
    spectrum: Spectrum,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    tolerance: float = DEFAULT_TOLERANCE,
) -> Spectrum:
    """Shirley background.

    Starts from the straight line between the end values. Each iteration
    sets ``B_i = y_end + (y_start - y_end) * A_right(i) / A_total`` where the
    areas are sums of ``max(0, y - B)``. Stops when the largest change drops
    below ``tolerance * (|y_start - y_end| + 1e-10)`` or when the area above
    the background vanishes.
    """
    n = len(spectrum)
    if n < 3:
        return Spectrum.zeros_like(spectrum)

    y = spectrum.y
    y_start, y_end = float(y[0]), float(y[-1])
    t = np.arange(n) / (n - 1)
    baseline = y_start * (1.0 - t) + y_end * t

    threshold = tolerance * (abs(y_start - y_end) + 1e-10)
    for iteration in range(max_iterations):
        excess = np.maximum(0.0, y - baseline)
        total = float(np.sum(excess))
        if total == 0.0:
            break

        area_right = np.cumsum(excess[::-1])[::-1]
        updated = y_end + (y_start - y_end) * (area_right / total)
        change = float(np.max(np.abs(updated - baseline)))
        baseline = updated
        if change < threshold:
            logger.debug("Shirley background converged after %d iterations", iteration + 1)
            break

    return spectrum.with_y(baseline)
