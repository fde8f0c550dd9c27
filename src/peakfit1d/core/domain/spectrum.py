"""Domain model for one-dimensional X/Y datasets.

A :class:`Spectrum` stores its samples as two parallel float arrays sorted
ascending by x. Curves derived from a spectrum (baselines, fitted curves,
residuals) share its x grid and are aligned with it by position.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, NamedTuple

import numpy as np

from peakfit1d.core.shared.exceptions import InvalidInputError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from peakfit1d.core.shared.typing import FloatArray

MATCH_TOLERANCE = 1e-4


class Sample(NamedTuple):
    """A single (x, y) observation."""

    x: float
    y: float


@dataclass(frozen=True, slots=True)
class Spectrum:
    """Ordered X/Y dataset.

    Attributes
    ----------
        x: Abscissa values, sorted ascending
        y: Ordinate values, co-indexed with ``x``
    """

    x: FloatArray = field(default_factory=lambda: np.empty(0))
    y: FloatArray = field(default_factory=lambda: np.empty(0))

    def __post_init__(self) -> None:
        x = np.asarray(self.x, dtype=float).ravel()
        y = np.asarray(self.y, dtype=float).ravel()
        if x.shape != y.shape:
            msg = f"x and y must have the same length, got {x.size} and {y.size}"
            raise InvalidInputError(msg)
        if x.size > 1 and np.any(np.diff(x) < 0):
            order = np.argsort(x, kind="stable")
            x, y = x[order], y[order]
        object.__setattr__(self, "x", x)
        object.__setattr__(self, "y", y)

    @classmethod
    def from_samples(cls, samples: Iterable[Sample | tuple[float, float]]) -> Spectrum:
        """Build a spectrum from (x, y) pairs, sorting them by x."""
        pairs = [(float(s[0]), float(s[1])) for s in samples]
        if not pairs:
            return cls()
        arr = np.asarray(pairs, dtype=float)
        return cls(arr[:, 0], arr[:, 1])

    @classmethod
    def zeros_like(cls, other: Spectrum) -> Spectrum:
        """Flat zero curve on the grid of ``other``."""
        return cls(other.x.copy(), np.zeros_like(other.x))

    def with_y(self, y: FloatArray) -> Spectrum:
        """Return a curve on the same grid with new ordinate values."""
        y_arr = np.asarray(y, dtype=float)
        if y_arr.shape != self.x.shape:
            msg = f"Expected {self.x.size} values, got {y_arr.size}"
            raise InvalidInputError(msg)
        return Spectrum(self.x.copy(), y_arr)

    def samples(self) -> list[Sample]:
        """Return the dataset as a list of samples."""
        return [Sample(float(xi), float(yi)) for xi, yi in zip(self.x, self.y, strict=True)]

    @property
    def is_empty(self) -> bool:
        return self.x.size == 0

    def __len__(self) -> int:
        return int(self.x.size)

    def __iter__(self) -> Iterator[Sample]:
        return iter(self.samples())


def match_by_x(
    reference: Spectrum,
    other: Spectrum,
    tolerance: float = MATCH_TOLERANCE,
    fill_value: float = 0.0,
) -> FloatArray:
    """Look up the y value of ``other`` at each x of ``reference``.

    Only meant for sequences that do not share a grid, e.g. the original
    data versus a resampled copy. A reference point without a sample of
    ``other`` closer than ``tolerance`` receives ``fill_value``.
    """
    result = np.full(reference.x.shape, fill_value, dtype=float)
    if other.is_empty or reference.is_empty:
        return result

    idx = np.searchsorted(other.x, reference.x)
    left = np.clip(idx - 1, 0, other.x.size - 1)
    right = np.clip(idx, 0, other.x.size - 1)
    d_left = np.abs(other.x[left] - reference.x)
    d_right = np.abs(other.x[right] - reference.x)
    nearest = np.where(d_left <= d_right, left, right)
    distance = np.minimum(d_left, d_right)

    found = distance < tolerance
    result[found] = other.y[nearest[found]]
    return result
