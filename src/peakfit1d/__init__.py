"""peakfit1d - Peak fitting for one-dimensional spectra.

Public API:
    - prepare: Preprocessing pipeline (outliers, crop, resample, smooth, normalise)
    - estimate_baseline: Background estimation
    - fit: Peak fit with optional baseline co-optimisation
    - optimize: Generic Levenberg-Marquardt least squares

Configuration:
    - PeakFit1DConfig: Configuration file model
    - ProcessingOptions, BaselineOptions, FitConfig: Sub-configurations

Domain Objects:
    - Spectrum, PeakComponent, Profile, FitResult
"""

import contextlib
from importlib import metadata

__version__ = "0.1.0"

with contextlib.suppress(metadata.PackageNotFoundError):
    __version__ = metadata.version(__name__)

from peakfit1d.core import (
    BaselineOptions,
    FitConfig,
    FitResult,
    LMOptions,
    LMResult,
    PeakComponent,
    PeakFit1DConfig,
    ProcessingOptions,
    Profile,
    Spectrum,
    estimate_baseline,
    fit,
    optimize,
    prepare,
)

__all__ = [
    # Version
    "__version__",
    # Operations
    "prepare",
    "estimate_baseline",
    "fit",
    "optimize",
    # Configuration
    "PeakFit1DConfig",
    "ProcessingOptions",
    "BaselineOptions",
    "FitConfig",
    "LMOptions",
    # Domain
    "Spectrum",
    "PeakComponent",
    "Profile",
    "FitResult",
    "LMResult",
]
