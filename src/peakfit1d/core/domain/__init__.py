"""Domain objects: spectra, peak components and configuration."""

from peakfit1d.core.domain.config import (
    BaselineOptions,
    FitConfig,
    OutlierConfig,
    PeakFit1DConfig,
    ProcessingOptions,
    SmoothingConfig,
)
from peakfit1d.core.domain.peaks import (
    PeakComponent,
    Profile,
    relative_weights,
    with_relative_weights,
)
from peakfit1d.core.domain.spectrum import Sample, Spectrum, match_by_x

__all__ = [
    "BaselineOptions",
    "FitConfig",
    "OutlierConfig",
    "PeakComponent",
    "PeakFit1DConfig",
    "ProcessingOptions",
    "Profile",
    "Sample",
    "SmoothingConfig",
    "Spectrum",
    "match_by_x",
    "relative_weights",
    "with_relative_weights",
]
