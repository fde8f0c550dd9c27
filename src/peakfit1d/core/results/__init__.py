"""Fit results and statistics."""

from peakfit1d.core.results.fit_results import FitResult
from peakfit1d.core.results.statistics import (
    FitStatistics,
    compute_adjusted_r_squared,
    compute_chi_squared,
    compute_degrees_of_freedom,
    compute_log_likelihood,
    compute_r_squared,
    compute_reduced_chi_squared,
)

__all__ = [
    "FitResult",
    "FitStatistics",
    "compute_adjusted_r_squared",
    "compute_chi_squared",
    "compute_degrees_of_freedom",
    "compute_log_likelihood",
    "compute_r_squared",
    "compute_reduced_chi_squared",
]
