"""Robust polynomial baseline by iterative sigma clipping.

The polynomial is refitted to the points lying below ``fit + sigma * rms``
until the set of retained points stops changing, which pulls the curve
towards the lower envelope of the data.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np
from numpy.polynomial import polynomial as npoly

from peakfit1d.core.algorithms.linear_algebra import lu_solve
from peakfit1d.core.baselines.linear import linear_baseline
from peakfit1d.core.domain.spectrum import Spectrum
from peakfit1d.core.shared.exceptions import SingularMatrixError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from peakfit1d.core.shared.typing import BoolArray, FloatArray

logger = logging.getLogger(__name__)

DEFAULT_MAX_ITER = 10
DEFAULT_SIGMA = 1.5


def evaluate_polynomial(x: FloatArray, coeffs: Sequence[float] | FloatArray) -> FloatArray:
    """Evaluate ``sum(c_i x^i)`` with the constant term first."""
    return npoly.polyval(np.asarray(x, dtype=float), np.asarray(coeffs, dtype=float))


def least_squares_polynomial(x: FloatArray, y: FloatArray, degree: int) -> FloatArray:
    """Fit a polynomial through the normal equations ``(V'V) c = V'y``.

    Raises
    ------
        SingularMatrixError: If the normal matrix is singular
    """
    vander = npoly.polyvander(x, degree)
    return lu_solve(vander.T @ vander, vander.T @ y)


def polynomial_baseline(
    spectrum: Spectrum,
    degree: int = 2,
    max_iter: int = DEFAULT_MAX_ITER,
    sigma: float = DEFAULT_SIGMA,
) -> Spectrum:
    """Robust polynomial baseline of the given degree.

    x is rescaled to [0, 1] before fitting. Datasets with fewer than
    ``degree + 1`` samples get the endpoint line instead.
    """
    n = len(spectrum)
    if n < degree + 1:
        return linear_baseline(spectrum)

    x, y = spectrum.x, spectrum.y
    x_min = float(np.min(x))
    x_range = float(np.max(x)) - x_min or 1.0
    x_norm = (x - x_min) / x_range

    mask: BoolArray = np.ones(n, dtype=bool)
    coeffs: FloatArray | None = None
    for iteration in range(max_iter):
        if np.count_nonzero(mask) < degree + 1:
            break
        try:
            coeffs = least_squares_polynomial(x_norm[mask], y[mask], degree)
        except SingularMatrixError:
            logger.debug("Singular polynomial normal equations at iteration %d", iteration)
            break

        residuals = y - evaluate_polynomial(x_norm, coeffs)
        rms = float(np.sqrt(np.mean(residuals[mask] ** 2)))
        new_mask = residuals < sigma * rms
        if np.array_equal(new_mask, mask):
            break
        mask = new_mask

    if coeffs is None:
        return linear_baseline(spectrum)
    return spectrum.with_y(evaluate_polynomial(x_norm, coeffs))
