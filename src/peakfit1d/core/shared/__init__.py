"""Shared helpers: exception taxonomy and typing aliases."""

from peakfit1d.core.shared.exceptions import (
    ConfigError,
    DataIOError,
    InvalidInputError,
    PeakFit1DError,
    SingularMatrixError,
)

__all__ = [
    "ConfigError",
    "DataIOError",
    "InvalidInputError",
    "PeakFit1DError",
    "SingularMatrixError",
]
