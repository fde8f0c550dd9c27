"""Exception taxonomy for peakfit1d.

Numerical edge cases (flat data, empty inputs, non-convergence) never raise:
they short-circuit to well-defined results. Exceptions are reserved for
broken call contracts and for I/O or configuration problems.
"""

from __future__ import annotations

import numpy as np


class PeakFit1DError(Exception):
    """Base class for all peakfit1d-specific exceptions."""


class ConfigError(PeakFit1DError):
    """Configuration-related errors (invalid/missing options, schema issues)."""


class DataIOError(PeakFit1DError):
    """Data loading/saving errors (files, formats, permissions)."""


class InvalidInputError(PeakFit1DError, ValueError):
    """Call-contract violations such as mismatched array lengths."""


class SingularMatrixError(PeakFit1DError, np.linalg.LinAlgError):
    """A linear system could not be solved because a pivot vanished."""


__all__ = [
    "ConfigError",
    "DataIOError",
    "InvalidInputError",
    "PeakFit1DError",
    "SingularMatrixError",
]
