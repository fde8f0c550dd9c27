"""Initial guesses for peak components.

``init_with_gmm`` seeds components on the most prominent local maxima,
``init_evenly_spaced`` spreads them uniformly over the X range. Both expect
baseline-corrected data.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from peakfit1d.core.domain.peaks import MIN_WIDTH, PeakComponent, Profile
from peakfit1d.core.shared.exceptions import InvalidInputError

if TYPE_CHECKING:
    from peakfit1d.core.domain.spectrum import Spectrum

# Maxima below this fraction of the y range are ignored
MIN_RELATIVE_PROMINENCE = 0.05


@dataclass(frozen=True, slots=True)
class LocalMaximum:
    """Local maximum with its prominence above the surrounding valleys."""

    x: float
    y: float
    prominence: float


def find_local_maxima(spectrum: Spectrum, min_prominence: float = 0.0) -> list[LocalMaximum]:
    """Find strict local maxima and their prominence.

    The valley on each side is the lowest sample met while walking outward
    until a sample higher than the maximum is reached.
    """
    x, y = spectrum.x, spectrum.y
    n = len(spectrum)
    maxima = []
    for i in range(1, n - 1):
        if not (y[i] > y[i - 1] and y[i] > y[i + 1]):
            continue

        left_valley = y[i]
        for j in range(i - 1, -1, -1):
            left_valley = min(left_valley, y[j])
            if y[j] > y[i]:
                break
        right_valley = y[i]
        for j in range(i + 1, n):
            right_valley = min(right_valley, y[j])
            if y[j] > y[i]:
                break

        prominence = float(y[i] - max(left_valley, right_valley))
        if prominence > min_prominence:
            maxima.append(LocalMaximum(float(x[i]), float(y[i]), prominence))
    return maxima


def estimate_width(spectrum: Spectrum, center: float) -> float:
    """Estimate the FWHM of the peak nearest ``center`` from half-maximum crossings."""
    x, y = spectrum.x, spectrum.y
    x_range = float(np.max(x) - np.min(x))
    center_idx = int(np.argmin(np.abs(x - center)))
    half_max = y[center_idx] / 2.0

    left_width = x_range / 20.0
    below = np.nonzero(y[:center_idx] <= half_max)[0]
    if below.size:
        left_width = center - float(x[below[-1]])

    right_width = x_range / 20.0
    below = np.nonzero(y[center_idx + 1 :] <= half_max)[0]
    if below.size:
        right_width = float(x[center_idx + 1 + below[0]]) - center

    return max(left_width + right_width, x_range / (len(spectrum) / 10.0), MIN_WIDTH)


def init_evenly_spaced(
    spectrum: Spectrum,
    n_peaks: int,
    profile: Profile = Profile.GAUSSIAN,
) -> list[PeakComponent]:
    """Place ``n_peaks`` components evenly across the X range.

    Amplitudes are ``max((y_max - y_min) / n, 0.5 y_max)`` and widths a
    quarter of the per-peak share of the range.
    """
    if spectrum.is_empty or n_peaks < 1:
        return []

    x_min, x_max = float(np.min(spectrum.x)), float(np.max(spectrum.x))
    x_range = (x_max - x_min) or 1.0
    y_min, y_max = float(np.min(spectrum.y)), float(np.max(spectrum.y))

    amplitude = max((y_max - y_min) / n_peaks, y_max * 0.5)
    width = x_range / (4 * n_peaks)
    return [
        PeakComponent(
            id=i + 1,
            profile=profile,
            center=x_min + (i + 1) / (n_peaks + 1) * x_range,
            amplitude=amplitude,
            width=width,
            weight=1.0,
        )
        for i in range(n_peaks)
    ]


def init_with_gmm(
    spectrum: Spectrum,
    n_peaks: int,
    profile: Profile = Profile.GAUSSIAN,
) -> list[PeakComponent]:
    """Seed components on the ``n_peaks`` most prominent local maxima.

    Any shortfall is filled with evenly spaced components; the result is
    sorted by center and numbered from 1.
    """
    if len(spectrum) < 3 or n_peaks < 1:
        return init_evenly_spaced(spectrum, n_peaks, profile)

    y_range = float(np.max(spectrum.y) - np.min(spectrum.y))
    if y_range == 0.0:
        return init_evenly_spaced(spectrum, n_peaks, profile)

    maxima = find_local_maxima(spectrum, min_prominence=y_range * MIN_RELATIVE_PROMINENCE)
    selected = sorted(maxima, key=lambda m: m.prominence, reverse=True)[:n_peaks]
    selected.sort(key=lambda m: m.x)

    components = [
        PeakComponent(
            id=i + 1,
            profile=profile,
            center=m.x,
            amplitude=m.y,
            width=estimate_width(spectrum, m.x),
            weight=1.0,
        )
        for i, m in enumerate(selected)
    ]
    if len(components) == n_peaks:
        return components

    components.extend(init_evenly_spaced(spectrum, n_peaks - len(components), profile))
    components.sort(key=lambda c: c.center)
    return [c.model_copy(update={"id": i + 1}) for i, c in enumerate(components)]


INITIALIZERS = {
    "gmm": init_with_gmm,
    "even": init_evenly_spaced,
}


def initialize_peaks(
    spectrum: Spectrum,
    n_peaks: int,
    profile: Profile = Profile.GAUSSIAN,
    method: str = "gmm",
) -> list[PeakComponent]:
    """Initial components from the named strategy (``gmm`` or ``even``).

    Raises
    ------
        InvalidInputError: If the strategy is unknown
    """
    try:
        initializer = INITIALIZERS[method]
    except KeyError:
        msg = f"Unknown initializer '{method}'. Available: {', '.join(INITIALIZERS)}"
        raise InvalidInputError(msg) from None
    return initializer(spectrum, n_peaks, profile)
