"""Test goodness-of-fit statistics."""

import math

import numpy as np
import pytest

from peakfit1d.core.results.fit_results import FitResult
from peakfit1d.core.results.statistics import (
    FitStatistics,
    compute_adjusted_r_squared,
    compute_chi_squared,
    compute_degrees_of_freedom,
    compute_log_likelihood,
    compute_r_squared,
    compute_reduced_chi_squared,
)


class TestScalarStatistics:
    """Tests for the individual statistic functions."""

    def test_chi_squared(self):
        assert compute_chi_squared(np.array([1.0, -2.0, 3.0])) == 14.0

    @pytest.mark.parametrize(("n", "p", "dof"), [(10, 3, 7), (3, 3, 1), (2, 5, 1)])
    def test_degrees_of_freedom(self, n, p, dof):
        assert compute_degrees_of_freedom(n, p) == dof

    def test_reduced_chi_squared(self):
        assert compute_reduced_chi_squared(14.0, 10, 3) == pytest.approx(2.0)
        assert compute_reduced_chi_squared(10.0, 5, 7) == 10.0

    def test_r_squared(self):
        assert compute_r_squared(0.0, 10.0) == 1.0
        assert compute_r_squared(2.5, 10.0) == 0.75

    def test_r_squared_floor(self):
        """A fit worse than the mean reports 0, not a negative value."""
        assert compute_r_squared(20.0, 10.0) == 0.0

    def test_r_squared_constant_data(self):
        """Zero total variance is treated as 1."""
        assert compute_r_squared(0.25, 0.0) == 0.75

    def test_adjusted_r_squared(self):
        assert compute_adjusted_r_squared(0.9, 10, 2) == pytest.approx(1 - 0.1 * 9 / 7)

    def test_adjusted_r_squared_overparameterised(self):
        """The denominator is floored at 1."""
        assert compute_adjusted_r_squared(0.9, 3, 3) == pytest.approx(0.8)
        assert compute_adjusted_r_squared(0.1, 3, 3) == 0.0

    def test_log_likelihood(self):
        assert compute_log_likelihood(10.0, 10) == 0.0
        assert compute_log_likelihood(10.0 * math.e**-2, 10) == pytest.approx(10.0)

    def test_log_likelihood_perfect_fit(self):
        """A zero residual gives a large but finite value."""
        value = compute_log_likelihood(0.0, 100)
        assert math.isfinite(value)
        assert value > 0

    def test_log_likelihood_no_data(self):
        assert compute_log_likelihood(0.0, 0) == 0.0


class TestFitStatistics:
    """Tests for the statistics bundle."""

    def setup_method(self):
        """Set up a small fit with known residuals."""
        self.observed = np.array([1.0, 2.0, 3.0, 4.0, 5.0])
        self.corrected = self.observed - 1.0
        self.fitted = self.corrected + np.array([0.1, -0.1, 0.0, 0.1, -0.1])

    def test_compute(self):
        stats = FitStatistics.compute(self.observed, self.corrected, self.fitted, 0.04, 2)
        ss_res = 0.04
        log_like = -2.5 * math.log(ss_res / 5)
        assert stats.n_data == 5
        assert stats.n_params == 2
        assert stats.r_squared == pytest.approx(1 - ss_res / 10.0)
        assert stats.rmse == pytest.approx(math.sqrt(ss_res / 5))
        assert stats.chi_squared == 0.04
        assert stats.reduced_chi_squared == pytest.approx(0.04 / 3)
        assert stats.log_likelihood == pytest.approx(log_like)
        assert stats.aic == pytest.approx(4 - 2 * log_like)
        assert stats.bic == pytest.approx(2 * math.log(5) - 2 * log_like)

    def test_total_variance_uses_observed(self):
        """SS_tot comes from the input data, not the corrected data."""
        corrected = np.zeros_like(self.observed)
        fitted = np.array([0.1, -0.1, 0.0, 0.1, -0.1])
        stats = FitStatistics.compute(self.observed, corrected, fitted, 0.04, 1)
        assert stats.r_squared == pytest.approx(1 - 0.04 / 10.0)

    def test_empty(self):
        stats = FitStatistics.compute(np.array([]), np.array([]), np.array([]), 0.0, 3)
        assert stats.n_data == 0
        assert stats.n_params == 3
        assert stats.r_squared == 0.0

    def test_to_dict(self):
        stats = FitStatistics.compute(self.observed, self.corrected, self.fitted, 0.04, 2)
        data = stats.to_dict()
        assert data["dof"] == 3
        assert data["r_squared"] == stats.r_squared
        assert set(data) >= {"aic", "bic", "rmse", "log_likelihood", "n_data", "n_params"}


class TestFitResult:
    """Tests for the fit result container."""

    def test_empty(self):
        result = FitResult.empty()
        assert result.r_squared == 0.0
        assert result.chi_squared == 0.0
        assert not result.converged
        assert result.fitted.is_empty

    def test_to_dict_omits_missing_baseline_params(self):
        data = FitResult.empty().to_dict()
        assert "baseline_params" not in data
        assert data["x"] == []
        assert data["statistics"]["n_data"] == 0
