"""Result of a peak fit."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from peakfit1d.core.domain.spectrum import Spectrum
from peakfit1d.core.results.statistics import FitStatistics

if TYPE_CHECKING:
    from peakfit1d.core.domain.peaks import PeakComponent


@dataclass(frozen=True, slots=True)
class FitResult:
    """Immutable outcome of :func:`peakfit1d.core.fitting.fit.fit`.

    All curves share the x grid of the fitted spectrum.

    Attributes
    ----------
        fitted: Sum of the fitted peaks
        residuals: Baseline-corrected data minus ``fitted``
        components: One curve per fitted peak
        baseline: Baseline used for the final statistics
        corrected: Input data minus ``baseline``
        statistics: Goodness-of-fit metrics
        parameters: Fitted components (weight reset to 1.0)
        iterations: Optimizer iterations
        converged: Whether the optimizer met its convergence criterion
        optimized_baseline: Baseline recomputed from co-optimised parameters
        baseline_params: Co-optimised baseline parameters
    """

    fitted: Spectrum = field(default_factory=Spectrum)
    residuals: Spectrum = field(default_factory=Spectrum)
    components: tuple[Spectrum, ...] = ()
    baseline: Spectrum = field(default_factory=Spectrum)
    corrected: Spectrum = field(default_factory=Spectrum)
    statistics: FitStatistics = field(default_factory=FitStatistics)
    parameters: tuple[PeakComponent, ...] = ()
    iterations: int = 0
    converged: bool = False
    optimized_baseline: Spectrum | None = None
    baseline_params: dict[str, float | list[float]] | None = None

    @property
    def r_squared(self) -> float:
        return self.statistics.r_squared

    @property
    def chi_squared(self) -> float:
        return self.statistics.chi_squared

    @classmethod
    def empty(cls, components: tuple[PeakComponent, ...] = ()) -> FitResult:
        """Result for a degenerate input: no curves, zero statistics."""
        return cls(parameters=components)

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for JSON serialization (curves as lists)."""
        result: dict[str, object] = {
            "converged": self.converged,
            "iterations": self.iterations,
            "statistics": self.statistics.to_dict(),
            "parameters": [c.model_dump(mode="json") for c in self.parameters],
            "x": self.fitted.x.tolist(),
            "fitted": self.fitted.y.tolist(),
            "residuals": self.residuals.y.tolist(),
            "baseline": self.baseline.y.tolist(),
            "corrected": self.corrected.y.tolist(),
            "components": [c.y.tolist() for c in self.components],
        }
        if self.baseline_params is not None:
            result["baseline_params"] = self.baseline_params
        return result
