"""Levenberg-Marquardt least-squares optimizer.

Minimises ``sum((y - f(x, params))**2)`` for an arbitrary model function.
The Jacobian is approximated by forward differences, so the model is treated
as a black box. Each iteration solves the damped normal equations

    (J'J + lambda * diag(max(J'J_ii, 1e-10))) delta = J'r

and accepts the step only if it lowers chi-squared. The damping shrinks
after accepted steps and grows after rejected or singular ones.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Annotated

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

from peakfit1d.core.algorithms.linear_algebra import lu_solve
from peakfit1d.core.shared.exceptions import InvalidInputError, SingularMatrixError

if TYPE_CHECKING:
    from peakfit1d.core.shared.typing import FloatArray, ModelFunction, ParameterConstraint

logger = logging.getLogger(__name__)

JACOBIAN_STEP = 1e-8
DIAGONAL_FLOOR = 1e-10
MAX_LAMBDA = 1e10
CHI2_EPSILON = 1e-10


class LMOptions(BaseModel):
    """Tuning knobs of the Levenberg-Marquardt loop."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    max_iterations: Annotated[int, Field(ge=0)] = Field(
        default=200,
        description="Maximum number of outer iterations.",
    )
    tolerance: Annotated[float, Field(ge=0)] = Field(
        default=1e-8,
        description="Relative chi-squared improvement below which the fit is converged.",
    )
    lambda_init: Annotated[float, Field(gt=0)] = Field(default=1e-3)
    lambda_up: Annotated[float, Field(gt=1)] = Field(default=10.0)
    lambda_down: Annotated[float, Field(gt=0, lt=1)] = Field(default=0.1)


@dataclass(slots=True)
class LMResult:
    """Outcome of :func:`optimize`.

    Attributes
    ----------
        params: Final parameter vector
        residuals: ``y - f(x, params)`` at the final parameters
        chi_squared: Sum of squared residuals
        iterations: Number of iterations performed
        converged: True only when the relative improvement criterion was met
        n_function_evals: Number of model evaluations
    """

    params: FloatArray
    residuals: FloatArray
    chi_squared: float
    iterations: int
    converged: bool
    n_function_evals: int = field(default=0)

    def to_dict(self) -> dict[str, object]:
        return {
            "params": self.params.tolist(),
            "chi_squared": self.chi_squared,
            "iterations": self.iterations,
            "converged": self.converged,
            "n_function_evals": self.n_function_evals,
        }


def forward_difference_jacobian(
    x: FloatArray,
    params: FloatArray,
    model: ModelFunction,
    y0: FloatArray,
    step: float = JACOBIAN_STEP,
) -> FloatArray:
    """Approximate ``d f(x, params) / d params`` column by column.

    Args:
        x: Independent variable
        params: Point at which to differentiate
        model: Model function
        y0: ``model(x, params)``, already evaluated
        step: Absolute step added to each parameter

    Returns
    -------
        Array of shape ``(len(x), len(params))``
    """
    jacobian = np.empty((y0.size, params.size))
    for j in range(params.size):
        shifted = params.copy()
        shifted[j] += step
        jacobian[:, j] = (model(x, shifted) - y0) / step
    return jacobian


def optimize(
    x: FloatArray,
    y: FloatArray,
    initial_params: FloatArray,
    model: ModelFunction,
    options: LMOptions | None = None,
    constrain: ParameterConstraint | None = None,
) -> LMResult:
    """Fit ``model`` to ``(x, y)`` by Levenberg-Marquardt.

    Args:
        x: Independent variable values
        y: Observed values, same length as ``x``
        initial_params: Starting parameter vector
        model: Callable ``f(x, params) -> y_pred``
        options: Loop settings; defaults to :class:`LMOptions`
        constrain: Optional projection applied to every trial parameter vector

    Returns
    -------
        LMResult with the best parameters found

    Raises
    ------
        InvalidInputError: If ``x`` and ``y`` differ in length
    """
    options = options or LMOptions()
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    if x.shape != y.shape:
        msg = f"x and y must have the same length, got {x.size} and {y.size}"
        raise InvalidInputError(msg)

    params = np.array(initial_params, dtype=float)
    if constrain is not None:
        params = constrain(params)

    y_pred = model(x, params)
    residuals = y - y_pred
    chi2 = float(residuals @ residuals)
    n_evals = 1

    lam = options.lambda_init
    converged = False
    iterations = 0
    jacobian: FloatArray | None = None

    for iteration in range(options.max_iterations):
        iterations = iteration + 1

        # Parameters only move on accepted steps, so J stays valid until then
        if jacobian is None:
            jacobian = forward_difference_jacobian(x, params, model, y_pred)
            n_evals += params.size
            jtj = jacobian.T @ jacobian
            jtr = jacobian.T @ residuals

        damped = jtj + np.diag(lam * np.maximum(np.diag(jtj), DIAGONAL_FLOOR))
        try:
            delta = lu_solve(damped, jtr)
        except SingularMatrixError:
            lam *= options.lambda_up
            logger.debug("Singular damped system at iteration %d, lambda -> %.3g", iterations, lam)
            continue

        trial = params + delta
        if constrain is not None:
            trial = constrain(trial)
        trial_pred = model(x, trial)
        n_evals += 1
        trial_residuals = y - trial_pred
        trial_chi2 = float(trial_residuals @ trial_residuals)

        if trial_chi2 < chi2:
            rel_change = (chi2 - trial_chi2) / (chi2 + CHI2_EPSILON)
            params, y_pred, residuals, chi2 = trial, trial_pred, trial_residuals, trial_chi2
            jacobian = None
            if rel_change < options.tolerance:
                converged = True
                break
            lam *= options.lambda_down
        else:
            lam *= options.lambda_up
            if lam > MAX_LAMBDA:
                logger.debug("Damping saturated after %d iterations", iterations)
                break

    logger.debug(
        "LM finished: chi2=%.6g iterations=%d converged=%s",
        chi2,
        iterations,
        converged,
    )
    return LMResult(
        params=params,
        residuals=residuals,
        chi_squared=chi2,
        iterations=iterations,
        converged=converged,
        n_function_evals=n_evals,
    )
