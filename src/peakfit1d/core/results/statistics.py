"""Goodness-of-fit statistics.

The information criteria use the Gaussian log-likelihood estimate
``logL = -n/2 ln(SS_res / n)``, so AIC and BIC are only comparable between
fits of the same dataset.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from peakfit1d.core.shared.typing import FloatArray

_TINY = float(np.finfo(float).tiny)


def compute_chi_squared(residuals: FloatArray) -> float:
    """Sum of squared residuals."""
    residuals = np.asarray(residuals, dtype=float)
    return float(residuals @ residuals)


def compute_degrees_of_freedom(n_data: int, n_params: int) -> int:
    """Degrees of freedom ``n - p``, at least 1."""
    return max(1, n_data - n_params)


def compute_reduced_chi_squared(chi_squared: float, n_data: int, n_params: int) -> float:
    return chi_squared / compute_degrees_of_freedom(n_data, n_params)


def compute_r_squared(ss_res: float, ss_tot: float) -> float:
    """Coefficient of determination, floored at 0.

    A zero total sum of squares is treated as 1.
    """
    return max(0.0, 1.0 - ss_res / (ss_tot or 1.0))


def compute_adjusted_r_squared(r_squared: float, n_data: int, n_params: int) -> float:
    """Adjusted R², floored at 0.

    The denominator ``n - p - 1`` is floored at 1 for over-parameterised fits.
    """
    denominator = max(1, n_data - n_params - 1)
    return max(0.0, 1.0 - (1.0 - r_squared) * (n_data - 1) / denominator)


def compute_log_likelihood(ss_res: float, n_data: int) -> float:
    """Gaussian log-likelihood estimate ``-n/2 ln(SS_res / n)``.

    The argument of the logarithm is floored at the smallest positive double
    so a perfect fit yields a large finite value instead of infinity.
    """
    if n_data == 0:
        return 0.0
    return -0.5 * n_data * math.log(max(ss_res / n_data, _TINY))


@dataclass(frozen=True, slots=True)
class FitStatistics:
    """Scalar fit quality metrics.

    Attributes
    ----------
        r_squared: Coefficient of determination
        adjusted_r_squared: R² corrected for the number of parameters
        rmse: Root mean square of the residuals
        chi_squared: Optimizer's final sum of squared residuals
        reduced_chi_squared: chi_squared / max(1, n - p)
        log_likelihood: Gaussian log-likelihood estimate
        aic: Akaike information criterion
        bic: Bayesian information criterion
        n_data: Number of samples
        n_params: Number of fitted parameters
    """

    r_squared: float = 0.0
    adjusted_r_squared: float = 0.0
    rmse: float = 0.0
    chi_squared: float = 0.0
    reduced_chi_squared: float = 0.0
    log_likelihood: float = 0.0
    aic: float = 0.0
    bic: float = 0.0
    n_data: int = 0
    n_params: int = 0

    @property
    def dof(self) -> int:
        return compute_degrees_of_freedom(self.n_data, self.n_params)

    @classmethod
    def compute(
        cls,
        observed: FloatArray,
        corrected: FloatArray,
        fitted: FloatArray,
        chi_squared: float,
        n_params: int,
    ) -> FitStatistics:
        """Compute all statistics for a finished fit.

        Args:
            observed: Input y values, used for the total sum of squares
            corrected: Baseline-corrected y values
            fitted: Peak sum at the fitted parameters
            chi_squared: Optimizer's final chi-squared
            n_params: Total number of fitted parameters

        Returns
        -------
            FitStatistics for the fit
        """
        observed = np.asarray(observed, dtype=float)
        n_data = observed.size
        if n_data == 0:
            return cls(n_params=n_params)

        residuals = np.asarray(corrected, dtype=float) - np.asarray(fitted, dtype=float)
        ss_res = compute_chi_squared(residuals)
        ss_tot = compute_chi_squared(observed - observed.mean())

        r_squared = compute_r_squared(ss_res, ss_tot)
        log_like = compute_log_likelihood(ss_res, n_data)
        return cls(
            r_squared=r_squared,
            adjusted_r_squared=compute_adjusted_r_squared(r_squared, n_data, n_params),
            rmse=math.sqrt(ss_res / n_data),
            chi_squared=chi_squared,
            reduced_chi_squared=compute_reduced_chi_squared(chi_squared, n_data, n_params),
            log_likelihood=log_like,
            aic=2 * n_params - 2 * log_like,
            bic=n_params * math.log(n_data) - 2 * log_like,
            n_data=n_data,
            n_params=n_params,
        )

    def to_dict(self) -> dict[str, float | int]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, float | int] = asdict(self)
        result["dof"] = self.dof
        return result
