"""Peak fitting: optimizer, parameter handling and orchestration."""

from peakfit1d.core.fitting.fit import fit
from peakfit1d.core.fitting.model import CombinedModel, PeakSumModel
from peakfit1d.core.fitting.optimizer import (
    LMOptions,
    LMResult,
    forward_difference_jacobian,
    optimize,
)
from peakfit1d.core.fitting.parameters import (
    BaselineTerm,
    baseline_term,
    clamp_peak_parameters,
    pack_components,
    unpack_components,
)

__all__ = [
    "BaselineTerm",
    "CombinedModel",
    "LMOptions",
    "LMResult",
    "PeakSumModel",
    "baseline_term",
    "clamp_peak_parameters",
    "fit",
    "forward_difference_jacobian",
    "optimize",
    "pack_components",
    "unpack_components",
]
