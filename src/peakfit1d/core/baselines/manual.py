"""Baseline interpolated through user-defined control points."""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

import numpy as np
from scipy.interpolate import CubicSpline

from peakfit1d.core.domain.spectrum import Spectrum

if TYPE_CHECKING:
    from collections.abc import Sequence

    from peakfit1d.core.shared.typing import FloatArray


def _control_arrays(points: Sequence[tuple[float, float]]) -> tuple[FloatArray, FloatArray]:
    """Sort control points by x and drop repeated abscissae (first one wins)."""
    arr = np.asarray(points, dtype=float).reshape(-1, 2)
    order = np.argsort(arr[:, 0], kind="stable")
    arr = arr[order]
    _, first = np.unique(arr[:, 0], return_index=True)
    arr = arr[first]
    return arr[:, 0], arr[:, 1]


def _extrapolate(x: FloatArray, values: FloatArray, px: FloatArray, py: FloatArray) -> FloatArray:
    """Continue the boundary segments linearly outside ``[px[0], px[-1]]``."""
    left = x < px[0]
    if np.any(left):
        slope = (py[1] - py[0]) / (px[1] - px[0])
        values[left] = py[0] + slope * (x[left] - px[0])
    right = x > px[-1]
    if np.any(right):
        slope = (py[-1] - py[-2]) / (px[-1] - px[-2])
        values[right] = py[-1] + slope * (x[right] - px[-1])
    return values


def interpolate_control_points(
    x: FloatArray,
    points: Sequence[tuple[float, float]],
    interp: Literal["linear", "cubic"] = "linear",
) -> FloatArray:
    """Evaluate the control-point curve at ``x``.

    ``cubic`` uses a natural cubic spline and needs at least three distinct
    points; otherwise the curve is piecewise linear.
    """
    px, py = _control_arrays(points)
    x = np.asarray(x, dtype=float)
    if px.size < 2:
        return np.zeros_like(x)

    if interp == "cubic" and px.size >= 3:
        values = CubicSpline(px, py, bc_type="natural")(x)
    else:
        values = np.interp(x, px, py)
    return _extrapolate(x, np.asarray(values, dtype=float), px, py)


def manual_baseline(
    spectrum: Spectrum,
    points: Sequence[tuple[float, float]],
    interp: Literal["linear", "cubic"] = "linear",
) -> Spectrum:
    """Manual baseline; fewer than two control points give a zero baseline."""
    if len(points) < 2:
        return Spectrum.zeros_like(spectrum)
    return spectrum.with_y(interpolate_control_points(spectrum.x, points, interp))
