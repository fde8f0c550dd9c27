"""Shared typing aliases used across peakfit1d."""

from collections.abc import Callable

import numpy as np
import numpy.typing as npt

FloatArray = npt.NDArray[np.float64]
BoolArray = npt.NDArray[np.bool_]

# f(x, params) -> predicted y
ModelFunction = Callable[[FloatArray, FloatArray], FloatArray]
# Projection applied to every trial parameter vector
ParameterConstraint = Callable[[FloatArray], FloatArray]
