"""Numerical routines: linear solvers, preprocessing and peak initialisation."""

from peakfit1d.core.algorithms.initialization import (
    INITIALIZERS,
    estimate_width,
    find_local_maxima,
    init_evenly_spaced,
    init_with_gmm,
    initialize_peaks,
)
from peakfit1d.core.algorithms.linear_algebra import (
    lu_solve,
    second_difference_gram,
    solve_pentadiagonal,
)
from peakfit1d.core.algorithms.preprocessing import (
    crop,
    interpolate_linear,
    normalize,
    prepare,
    remove_outliers_iqr,
    remove_outliers_zscore,
    resample,
    savitzky_golay,
)

__all__ = [
    "INITIALIZERS",
    "crop",
    "estimate_width",
    "find_local_maxima",
    "init_evenly_spaced",
    "init_with_gmm",
    "initialize_peaks",
    "interpolate_linear",
    "lu_solve",
    "normalize",
    "prepare",
    "remove_outliers_iqr",
    "remove_outliers_zscore",
    "resample",
    "savitzky_golay",
    "second_difference_gram",
    "solve_pentadiagonal",
]
