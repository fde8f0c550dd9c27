"""Rolling-ball baseline: sliding minimum followed by light smoothing."""

from __future__ import annotations

import math

import numpy as np
from scipy.ndimage import minimum_filter1d

from peakfit1d.core.domain.spectrum import Spectrum

DEFAULT_RADIUS = 10.0
SMOOTHING_PASSES = 3


def rolling_ball_baseline(spectrum: Spectrum, radius: float = DEFAULT_RADIUS) -> Spectrum:
    """Minimum over ``[i - r, i + r]`` smoothed by three 3-point moving averages.

    The radius is in samples and rounded up. End points keep their minimum
    envelope value.
    """
    n = len(spectrum)
    if n < 3:
        return Spectrum.zeros_like(spectrum)

    half_window = max(math.ceil(radius), 0)
    # Edge replication cannot lower a window minimum
    envelope = minimum_filter1d(spectrum.y, size=2 * half_window + 1, mode="nearest")

    smoothed = envelope.astype(float)
    for _ in range(SMOOTHING_PASSES):
        previous = smoothed.copy()
        smoothed[1:-1] = (previous[:-2] + previous[1:-1] + previous[2:]) / 3.0
    return spectrum.with_y(np.asarray(smoothed))
