"""Data preparation pipeline.

The order is fixed: outlier removal, crop to the X range, resampling onto a
uniform grid, Savitzky-Golay smoothing and normalisation.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np
from scipy.signal import savgol_filter

from peakfit1d.core.domain.spectrum import Spectrum

if TYPE_CHECKING:
    from peakfit1d.core.domain.config import ProcessingOptions
    from peakfit1d.core.shared.typing import FloatArray

logger = logging.getLogger(__name__)


def remove_outliers_zscore(spectrum: Spectrum, threshold: float) -> Spectrum:
    """Drop samples whose |z-score| reaches ``threshold``.

    Uses the population standard deviation. No-op below three samples or
    when the data are flat.
    """
    if len(spectrum) < 3:
        return spectrum
    y = spectrum.y
    std = float(np.std(y))
    if std == 0.0:
        return spectrum
    keep = np.abs((y - np.mean(y)) / std) < threshold
    return Spectrum(spectrum.x[keep], y[keep])


def remove_outliers_iqr(spectrum: Spectrum, factor: float) -> Spectrum:
    """Drop samples outside ``[Q1 - k IQR, Q3 + k IQR]``.

    Quartiles are read from the sorted values at indices ``floor(0.25 n)``
    and ``floor(0.75 n)``. No-op below four samples.
    """
    n = len(spectrum)
    if n < 4:
        return spectrum
    ordered = np.sort(spectrum.y)
    q1 = ordered[int(np.floor(n * 0.25))]
    q3 = ordered[int(np.floor(n * 0.75))]
    iqr = q3 - q1
    keep = (spectrum.y >= q1 - factor * iqr) & (spectrum.y <= q3 + factor * iqr)
    return Spectrum(spectrum.x[keep], spectrum.y[keep])


def crop(spectrum: Spectrum, x_min: float | None = None, x_max: float | None = None) -> Spectrum:
    """Keep samples with ``x_min <= x <= x_max`` (inclusive, either bound optional)."""
    keep = np.ones(len(spectrum), dtype=bool)
    if x_min is not None:
        keep &= spectrum.x >= x_min
    if x_max is not None:
        keep &= spectrum.x <= x_max
    return Spectrum(spectrum.x[keep], spectrum.y[keep])


def interpolate_linear(x_data: FloatArray, y_data: FloatArray, x_new: FloatArray) -> FloatArray:
    """Piecewise-linear interpolation with linear extrapolation at both ends.

    Points outside the data span follow the slope of the nearest edge
    segment.
    """
    x_new = np.asarray(x_new, dtype=float)
    y_new = np.interp(x_new, x_data, y_data)
    if x_data.size < 2:
        return y_new

    left = x_new < x_data[0]
    if np.any(left):
        slope = (y_data[1] - y_data[0]) / (x_data[1] - x_data[0])
        y_new[left] = y_data[0] + slope * (x_new[left] - x_data[0])
    right = x_new > x_data[-1]
    if np.any(right):
        slope = (y_data[-1] - y_data[-2]) / (x_data[-1] - x_data[-2])
        y_new[right] = y_data[-1] + slope * (x_new[right] - x_data[-1])
    return y_new


def uniform_grid(start: float, stop: float, step: float) -> FloatArray:
    """Grid ``start, start + step, ...`` up to ``stop`` (with 0.1 % slack)."""
    if stop < start:
        return np.empty(0)
    count = int(np.floor((stop - start + step * 0.001) / step)) + 1
    return start + step * np.arange(count)


def resample(
    spectrum: Spectrum,
    step: float,
    x_min: float | None = None,
    x_max: float | None = None,
) -> Spectrum:
    """Interpolate onto a uniform grid.

    The grid spans ``[x_min, x_max]`` when given, otherwise the data range.
    Grid points beyond the data are extrapolated linearly.
    """
    if step <= 0 or len(spectrum) < 2:
        return spectrum
    start = spectrum.x[0] if x_min is None else x_min
    stop = spectrum.x[-1] if x_max is None else x_max
    x_new = uniform_grid(start, stop, step)
    return Spectrum(x_new, interpolate_linear(spectrum.x, spectrum.y, x_new))


def savitzky_golay(y: FloatArray, window_length: int, poly_order: int) -> FloatArray:
    """Savitzky-Golay smoothing with mirrored boundaries.

    Each output sample is the constant term of a least-squares polynomial
    fitted to the centred window, the window being reflected (edge sample
    excluded) near the ends. Arrays shorter than the requested window are
    returned unchanged; otherwise even window lengths are bumped to the next
    odd length and ``poly_order`` is clamped below the window length.
    """
    y = np.asarray(y, dtype=float)
    if y.size < window_length:
        return y.copy()
    if window_length % 2 == 0:
        window_length += 1
    poly_order = min(poly_order, window_length - 1)
    return savgol_filter(y, window_length, poly_order, mode="mirror")


def normalize(spectrum: Spectrum) -> Spectrum:
    """Divide y by ``max(|y|)``; no-op for empty or all-zero data."""
    if spectrum.is_empty:
        return spectrum
    peak = float(np.max(np.abs(spectrum.y)))
    if peak == 0.0:
        return spectrum
    return spectrum.with_y(spectrum.y / peak)


def prepare(spectrum: Spectrum, options: ProcessingOptions) -> Spectrum:
    """Run the preprocessing pipeline on ``spectrum``.

    Args:
        spectrum: Raw samples
        options: Processing settings

    Returns
    -------
        Processed samples
    """
    processed = spectrum

    outliers = options.outlier_removal
    if outliers.method == "zscore":
        processed = remove_outliers_zscore(processed, outliers.threshold)
    elif outliers.method == "iqr":
        processed = remove_outliers_iqr(processed, outliers.threshold)
    if len(processed) != len(spectrum):
        logger.debug("Outlier removal dropped %d samples", len(spectrum) - len(processed))

    if options.x_min is not None or options.x_max is not None:
        processed = crop(processed, options.x_min, options.x_max)

    if options.interpolation_step and len(processed) >= 2:
        processed = resample(processed, options.interpolation_step, options.x_min, options.x_max)

    smoothing = options.smoothing
    if smoothing.enabled and len(processed) >= smoothing.window_length:
        smoothed = savitzky_golay(processed.y, smoothing.window_length, smoothing.poly_order)
        processed = processed.with_y(smoothed)

    if options.normalize:
        processed = normalize(processed)

    logger.debug("Prepared %d samples from %d raw samples", len(processed), len(spectrum))
    return processed
