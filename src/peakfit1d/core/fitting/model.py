"""Model functions evaluated by the optimizer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np

from peakfit1d.core.domain.peaks import FWHM_TO_GAMMA, FWHM_TO_SIGMA
from peakfit1d.core.fitting.parameters import PARAMS_PER_PEAK
from peakfit1d.core.lineshapes.registry import get_profile

if TYPE_CHECKING:
    from collections.abc import Sequence

    from peakfit1d.core.domain.peaks import Profile
    from peakfit1d.core.fitting.parameters import BaselineTerm
    from peakfit1d.core.lineshapes.registry import ProfileFunction
    from peakfit1d.core.shared.typing import FloatArray


@dataclass
class PeakSumModel:
    """Sum of peaks whose (center, amplitude, width) come from a flat vector.

    sigma and gamma are always derived from the width here.
    """

    profiles: Sequence[Profile]
    _functions: list[ProfileFunction] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._functions = [get_profile(profile) for profile in self.profiles]

    @property
    def n_params(self) -> int:
        return PARAMS_PER_PEAK * len(self._functions)

    def component(self, x: FloatArray, params: FloatArray, index: int) -> FloatArray:
        """Curve of a single peak."""
        start = index * PARAMS_PER_PEAK
        center, amplitude, width = params[start : start + PARAMS_PER_PEAK]
        return self._functions[index](
            x, center, amplitude, width / FWHM_TO_SIGMA, width / FWHM_TO_GAMMA
        )

    def __call__(self, x: FloatArray, params: FloatArray) -> FloatArray:
        total = np.zeros(np.shape(x), dtype=float)
        for index in range(len(self._functions)):
            total += self.component(x, params, index)
        return total


@dataclass
class CombinedModel:
    """Peaks plus a co-optimised baseline, fitted against the raw data.

    Non-parametric baselines are re-estimated from ``y - peaks`` on every
    call. The peak sum is cached on the peak slice of the vector, so
    Jacobian columns that only shift a baseline parameter reuse it.
    """

    peaks: PeakSumModel
    term: BaselineTerm
    y: FloatArray

    _cache_key: bytes | None = field(default=None, init=False, repr=False)
    _cache_value: FloatArray | None = field(default=None, init=False, repr=False)

    def peak_sum(self, x: FloatArray, params: FloatArray) -> FloatArray:
        peak_params = np.ascontiguousarray(params[: self.peaks.n_params])
        key = peak_params.tobytes() + np.ascontiguousarray(x).tobytes()
        if key != self._cache_key or self._cache_value is None:
            self._cache_value = self.peaks(x, peak_params)
            self._cache_key = key
        return self._cache_value

    def baseline(
        self,
        x: FloatArray,
        params: FloatArray,
        *,
        final: bool = False,
    ) -> FloatArray:
        """Baseline implied by ``params``."""
        values = params[self.peaks.n_params :]
        if self.term.parametric:
            return self.term.curve(x, self.y, values, final=final)
        residual = self.y - self.peak_sum(x, params)
        return self.term.curve(x, residual, values, final=final)

    def __call__(self, x: FloatArray, params: FloatArray) -> FloatArray:
        return self.peak_sum(x, params) + self.baseline(x, params)
