"""Core module for peakfit1d - numerical engine and data models."""

from peakfit1d.core.algorithms.preprocessing import prepare
from peakfit1d.core.baselines.estimate import estimate_baseline
from peakfit1d.core.domain.config import (
    BaselineOptions,
    FitConfig,
    PeakFit1DConfig,
    ProcessingOptions,
)
from peakfit1d.core.domain.peaks import PeakComponent, Profile
from peakfit1d.core.domain.spectrum import Spectrum
from peakfit1d.core.fitting.fit import fit
from peakfit1d.core.fitting.optimizer import LMOptions, LMResult, optimize
from peakfit1d.core.results.fit_results import FitResult

__all__ = [
    "BaselineOptions",
    "FitConfig",
    "FitResult",
    "LMOptions",
    "LMResult",
    "PeakComponent",
    "PeakFit1DConfig",
    "ProcessingOptions",
    "Profile",
    "Spectrum",
    "estimate_baseline",
    "fit",
    "optimize",
    "prepare",
]
