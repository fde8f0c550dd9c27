"""Straight-line baseline."""

from __future__ import annotations

from peakfit1d.core.domain.spectrum import Spectrum


def endpoint_line(spectrum: Spectrum) -> tuple[float, float]:
    """Slope and intercept of the line through the first and last samples."""
    x1, y1 = float(spectrum.x[0]), float(spectrum.y[0])
    x2, y2 = float(spectrum.x[-1]), float(spectrum.y[-1])
    if x2 == x1:
        return 0.0, y1
    slope = (y2 - y1) / (x2 - x1)
    return slope, y1 - slope * x1


def linear_baseline(
    spectrum: Spectrum,
    slope: float | None = None,
    intercept: float | None = None,
) -> Spectrum:
    """Linear baseline ``slope * x + intercept``.

    The supplied slope and intercept are used when both are given; otherwise
    the line passes through the two endpoint samples.
    """
    if len(spectrum) < 2:
        return Spectrum.zeros_like(spectrum)
    if slope is None or intercept is None:
        slope, intercept = endpoint_line(spectrum)
    return spectrum.with_y(slope * spectrum.x + intercept)
