"""Packing of peak and baseline parameters into the optimizer vector.

The vector layout is ``[center_1, amp_1, width_1, ..., center_k, amp_k,
width_k, b_1, ..., b_m]`` where ``amp_i`` already includes the component
weight and ``b_j`` are the parameters of the co-optimised baseline, if any.

Each co-optimisable baseline method is described by a :class:`BaselineTerm`.
Parametric terms (linear, polynomial) are evaluated directly on x; the
others re-estimate the baseline from ``y - peaks`` with the trial values.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

import numpy as np

from peakfit1d.core.baselines.asls import asls_baseline
from peakfit1d.core.baselines.polynomial import evaluate_polynomial
from peakfit1d.core.baselines.rolling_ball import rolling_ball_baseline
from peakfit1d.core.baselines.shirley import shirley_baseline
from peakfit1d.core.domain.peaks import MIN_WIDTH, PeakComponent
from peakfit1d.core.domain.spectrum import Spectrum

if TYPE_CHECKING:
    from collections.abc import Sequence

    from peakfit1d.core.domain.config import BaselineOptions
    from peakfit1d.core.shared.typing import FloatArray

PARAMS_PER_PEAK = 3

ASLS_LOG_LAMBDA_RANGE = (2.0, 10.0)
ASLS_P_RANGE = (1e-4, 0.5)
ASLS_MODEL_ITERATIONS = 5
ASLS_FINAL_ITERATIONS = 10


# ---------------------------------------------------------------------------
# Peak parameters
# ---------------------------------------------------------------------------


def pack_components(components: Sequence[PeakComponent]) -> FloatArray:
    """Flatten components into ``[center, amplitude * weight, width]`` triples."""
    values = [(c.center, c.effective_amplitude, c.width) for c in components]
    return np.asarray(values, dtype=float).reshape(-1)


def clamp_peak_parameters(params: FloatArray, n_components: int) -> FloatArray:
    """Project peak parameters onto ``amplitude >= 0`` and ``width >= MIN_WIDTH``.

    Baseline parameters past the peak block are left untouched.
    """
    clamped = np.array(params, dtype=float)
    peaks = clamped[: n_components * PARAMS_PER_PEAK].reshape(-1, PARAMS_PER_PEAK)
    np.maximum(peaks[:, 1], 0.0, out=peaks[:, 1])
    np.maximum(peaks[:, 2], MIN_WIDTH, out=peaks[:, 2])
    return clamped


def unpack_components(
    params: FloatArray,
    templates: Sequence[PeakComponent],
) -> list[PeakComponent]:
    """Rebuild components from optimised values.

    Profile and id are taken from ``templates``. Weights are reset to 1.0 so
    callers can derive them from the fitted amplitudes, and sigma/gamma
    overrides are dropped since the width is the fitted quantity.
    """
    clamped = clamp_peak_parameters(params, len(templates))
    fitted = []
    for i, template in enumerate(templates):
        center, amplitude, width = clamped[i * PARAMS_PER_PEAK : (i + 1) * PARAMS_PER_PEAK]
        fitted.append(
            template.model_copy(
                update={
                    "center": float(center),
                    "amplitude": float(amplitude),
                    "width": float(width),
                    "weight": 1.0,
                    "sigma": None,
                    "gamma": None,
                }
            )
        )
    return fitted


# ---------------------------------------------------------------------------
# Baseline parameters
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class BaselineTerm:
    """Baseline contribution driven by a slice of the parameter vector."""

    method: ClassVar[str] = ""
    parametric: ClassVar[bool] = False

    @property
    def size(self) -> int:
        return len(self.names)

    @property
    def names(self) -> tuple[str, ...]:
        raise NotImplementedError

    def initial(self, options: BaselineOptions) -> FloatArray:
        """Starting values for the baseline parameters."""
        raise NotImplementedError

    def curve(
        self,
        x: FloatArray,
        residual: FloatArray,
        values: FloatArray,
        *,
        final: bool = False,
    ) -> FloatArray:
        """Baseline on ``x``.

        Args:
            x: Sample positions
            residual: Observed y minus the current peak sum
            values: Trial baseline parameters
            final: True for the recomputation after the fit has finished
        """
        raise NotImplementedError

    def describe(self, values: FloatArray) -> dict[str, float | list[float]]:
        """Reported form of the optimised parameters."""
        return {name: float(v) for name, v in zip(self.names, values, strict=True)}


@dataclass(frozen=True, slots=True)
class LinearTerm(BaselineTerm):
    method: ClassVar[str] = "linear"
    parametric: ClassVar[bool] = True

    @property
    def names(self) -> tuple[str, ...]:
        return ("slope", "intercept")

    def initial(self, options: BaselineOptions) -> FloatArray:
        return np.array([options.slope or 0.0, options.intercept or 0.0])

    def curve(
        self,
        x: FloatArray,
        residual: FloatArray,
        values: FloatArray,
        *,
        final: bool = False,
    ) -> FloatArray:
        return values[0] * x + values[1]


@dataclass(frozen=True, slots=True)
class PolynomialTerm(BaselineTerm):
    """Power series in raw x, constant term first, starting from zero."""

    method: ClassVar[str] = "polynomial"
    parametric: ClassVar[bool] = True

    degree: int = 2

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(f"c{i}" for i in range(self.degree + 1))

    def initial(self, options: BaselineOptions) -> FloatArray:
        return np.zeros(self.degree + 1)

    def curve(
        self,
        x: FloatArray,
        residual: FloatArray,
        values: FloatArray,
        *,
        final: bool = False,
    ) -> FloatArray:
        return evaluate_polynomial(x, values)

    def describe(self, values: FloatArray) -> dict[str, float | list[float]]:
        return {"coeffs": [float(v) for v in values]}


@dataclass(frozen=True, slots=True)
class AslsTerm(BaselineTerm):
    """AsLS re-estimated on the residual; parameters are ``log10(lam)`` and ``p``."""

    method: ClassVar[str] = "asls"

    @property
    def names(self) -> tuple[str, ...]:
        return ("log10_lam", "p")

    def initial(self, options: BaselineOptions) -> FloatArray:
        return np.array([math.log10(options.lam), options.p])

    @staticmethod
    def clamped(values: FloatArray) -> tuple[float, float]:
        """Smoothness and asymmetry restricted to their usable ranges."""
        log_lam = float(np.clip(values[0], *ASLS_LOG_LAMBDA_RANGE))
        p = float(np.clip(values[1], *ASLS_P_RANGE))
        return 10.0**log_lam, p

    def curve(
        self,
        x: FloatArray,
        residual: FloatArray,
        values: FloatArray,
        *,
        final: bool = False,
    ) -> FloatArray:
        lam, p = self.clamped(values)
        iterations = ASLS_FINAL_ITERATIONS if final else ASLS_MODEL_ITERATIONS
        return asls_baseline(Spectrum(x, residual), lam, p, iterations).y

    def describe(self, values: FloatArray) -> dict[str, float | list[float]]:
        lam, p = self.clamped(values)
        return {"lam": lam, "p": p}


@dataclass(frozen=True, slots=True)
class RollingBallTerm(BaselineTerm):
    """Rolling ball with the radius rounded to whole samples (at least 1)."""

    method: ClassVar[str] = "rolling_ball"

    @property
    def names(self) -> tuple[str, ...]:
        return ("radius",)

    def initial(self, options: BaselineOptions) -> FloatArray:
        return np.array([float(options.radius)])

    @staticmethod
    def radius(values: FloatArray) -> int:
        return max(1, round(float(values[0])))

    def curve(
        self,
        x: FloatArray,
        residual: FloatArray,
        values: FloatArray,
        *,
        final: bool = False,
    ) -> FloatArray:
        return rolling_ball_baseline(Spectrum(x, residual), self.radius(values)).y

    def describe(self, values: FloatArray) -> dict[str, float | list[float]]:
        return {"radius": float(self.radius(values))}


@dataclass(frozen=True, slots=True)
class ShirleyTerm(BaselineTerm):
    """Shirley background with adjustable offsets on the two end values."""

    method: ClassVar[str] = "shirley"

    max_iterations: int = 50
    tolerance: float = 1e-5

    @property
    def names(self) -> tuple[str, ...]:
        return ("start_offset", "end_offset")

    def initial(self, options: BaselineOptions) -> FloatArray:
        return np.zeros(2)

    def curve(
        self,
        x: FloatArray,
        residual: FloatArray,
        values: FloatArray,
        *,
        final: bool = False,
    ) -> FloatArray:
        adjusted = np.array(residual, dtype=float)
        if adjusted.size:
            adjusted[0] += values[0]
            adjusted[-1] += values[1]
        return shirley_baseline(Spectrum(x, adjusted), self.max_iterations, self.tolerance).y


def baseline_term(options: BaselineOptions | None) -> BaselineTerm | None:
    """Term to co-optimise for ``options``, or None for a sequential fit.

    Methods without a parameterisation (``none`` and ``manual``) always
    fall back to the sequential mode.
    """
    if options is None or not options.optimize_simultaneously:
        return None
    if options.method == "linear":
        return LinearTerm()
    if options.method == "polynomial":
        return PolynomialTerm(degree=options.degree)
    if options.method == "asls":
        return AslsTerm()
    if options.method == "rolling_ball":
        return RollingBallTerm()
    if options.method == "shirley":
        return ShirleyTerm(options.shirley_iterations, options.shirley_tolerance)
    return None
