"""Asymmetric least squares (AsLS) baseline.

Solves the Whittaker smoothing problem ``(W + lam D2'D2) z = W y``
repeatedly, re-deriving the weights after each pass: samples above the
current baseline get weight ``p`` and samples below get ``1 - p``. With
``p << 0.5`` the curve settles on the lower envelope of the data.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from peakfit1d.core.algorithms.linear_algebra import second_difference_gram, solve_pentadiagonal
from peakfit1d.core.domain.spectrum import Spectrum

if TYPE_CHECKING:
    from peakfit1d.core.shared.typing import FloatArray

DEFAULT_LAMBDA = 1e5
DEFAULT_P = 0.01
DEFAULT_ITERATIONS = 10


def whittaker_smooth(y: FloatArray, w: FloatArray, lam: float) -> FloatArray:
    """Weighted Whittaker smoother with a second-difference penalty."""
    n = y.size
    if n < 3:
        return np.array(y, dtype=float)
    diag, off1, off2 = second_difference_gram(n)
    return solve_pentadiagonal(w + lam * diag, lam * off1, lam * off2, w * y)


def asls_baseline(
    spectrum: Spectrum,
    lam: float = DEFAULT_LAMBDA,
    p: float = DEFAULT_P,
    iterations: int = DEFAULT_ITERATIONS,
) -> Spectrum:
    """AsLS baseline; datasets shorter than three samples get a zero baseline."""
    if len(spectrum) < 3:
        return Spectrum.zeros_like(spectrum)

    y = spectrum.y
    w = np.ones_like(y)
    z = y.copy()
    for _ in range(iterations):
        z = whittaker_smooth(y, w, lam)
        w = np.where(y > z, p, 1.0 - p)
    return spectrum.with_y(z)
