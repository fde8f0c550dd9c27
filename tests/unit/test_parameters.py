"""Test parameter packing, baseline terms and model functions."""

import numpy as np
import pytest

from peakfit1d.core.domain.config import BaselineOptions
from peakfit1d.core.domain.peaks import MIN_WIDTH, PeakComponent, Profile
from peakfit1d.core.fitting.model import CombinedModel, PeakSumModel
from peakfit1d.core.fitting.parameters import (
    AslsTerm,
    BaselineTerm,
    LinearTerm,
    PolynomialTerm,
    RollingBallTerm,
    ShirleyTerm,
    baseline_term,
    clamp_peak_parameters,
    pack_components,
    unpack_components,
)
from peakfit1d.core.lineshapes.functions import evaluate_components


class TestPacking:
    """Tests for the flat parameter vector."""

    def test_pack_includes_weight(self, two_peak_components):
        """Amplitude is packed as amplitude times weight."""
        comps = [two_peak_components[0].model_copy(update={"weight": 0.5}), two_peak_components[1]]
        np.testing.assert_array_equal(pack_components(comps), [30.0, 4.0, 6.0, 65.0, 5.0, 10.0])

    def test_pack_empty(self):
        assert pack_components([]).shape == (0,)

    def test_unpack_resets_weight(self):
        """Unpacked components carry weight 1.0 and no width overrides."""
        template = PeakComponent(
            id=7, profile=Profile.VOIGT, center=0.0, amplitude=1.0, width=1.0,
            weight=0.3, sigma=0.2, gamma=0.4,
        )
        (comp,) = unpack_components(np.array([2.0, 5.0, 3.0]), [template])
        assert (comp.id, comp.profile) == (7, Profile.VOIGT)
        assert (comp.center, comp.amplitude, comp.width) == (2.0, 5.0, 3.0)
        assert comp.weight == 1.0
        assert comp.sigma is None
        assert comp.gamma is None

    def test_unpack_clamps(self, single_gaussian):
        """Negative amplitudes and tiny widths are projected back."""
        (comp,) = unpack_components(np.array([50.0, -1.0, -4.0]), [single_gaussian])
        assert comp.amplitude == 0.0
        assert comp.width == MIN_WIDTH

    def test_unpack_ignores_baseline_tail(self, single_gaussian):
        """Trailing baseline values do not affect the components."""
        (comp,) = unpack_components(np.array([50.0, 2.0, 3.0, 99.0, -99.0]), [single_gaussian])
        assert comp.center == 50.0

    def test_clamp_leaves_baseline(self):
        params = np.array([1.0, -2.0, 0.0, -5.0, -6.0])
        clamped = clamp_peak_parameters(params, 1)
        np.testing.assert_array_equal(clamped, [1.0, 0.0, MIN_WIDTH, -5.0, -6.0])
        assert params[1] == -2.0


class TestBaselineTerm:
    """Tests for the co-optimised baseline parameterisations."""

    @pytest.mark.parametrize("method", ["linear", "asls"])
    def test_sequential_by_default(self, method):
        """Without the simultaneous flag there is no term."""
        assert baseline_term(BaselineOptions(method=method)) is None
        assert baseline_term(None) is None

    @pytest.mark.parametrize("method", ["none", "manual"])
    def test_methods_without_parameters(self, method):
        """none and manual always run sequentially."""
        options = BaselineOptions(method=method, optimize_simultaneously=True)
        assert baseline_term(options) is None

    @pytest.mark.parametrize(
        ("method", "cls", "size"),
        [
            ("linear", LinearTerm, 2),
            ("polynomial", PolynomialTerm, 4),
            ("asls", AslsTerm, 2),
            ("rolling_ball", RollingBallTerm, 1),
            ("shirley", ShirleyTerm, 2),
        ],
    )
    def test_term_sizes(self, method, cls, size):
        options = BaselineOptions(method=method, degree=3, optimize_simultaneously=True)
        term = baseline_term(options)
        assert isinstance(term, cls)
        assert term.size == size
        assert term.initial(options).shape == (size,)

    def test_linear_initial_values(self):
        """Linear starts from the configured slope and intercept, or zero."""
        assert LinearTerm().initial(BaselineOptions(slope=0.5)).tolist() == [0.5, 0.0]

    def test_asls_initial_is_log_lambda(self):
        values = AslsTerm().initial(BaselineOptions(lam=1e6, p=0.02))
        np.testing.assert_allclose(values, [6.0, 0.02])

    def test_asls_clamping(self):
        """lambda and p are clipped to their usable ranges."""
        assert AslsTerm.clamped(np.array([12.0, 0.9])) == (1e10, 0.5)
        assert AslsTerm.clamped(np.array([0.0, -1.0])) == (100.0, 1e-4)
        assert AslsTerm().describe(np.array([1.0, 0.7])) == {"lam": 100.0, "p": 0.5}

    @pytest.mark.parametrize(("value", "radius"), [(4.4, 4), (4.6, 5), (0.2, 1), (-3.0, 1)])
    def test_rolling_ball_radius(self, value, radius):
        """The radius is rounded to whole samples and at least 1."""
        assert RollingBallTerm.radius(np.array([value])) == radius

    def test_polynomial_describe(self):
        described = PolynomialTerm(degree=1).describe(np.array([1.0, 2.0]))
        assert described == {"coeffs": [1.0, 2.0]}

    def test_linear_describe(self):
        described = LinearTerm().describe(np.array([0.1, 2.0]))
        assert described == {"slope": 0.1, "intercept": 2.0}

    def test_shirley_offsets_move_endpoints(self):
        """The end offsets shift the Shirley end levels."""
        x = np.arange(10.0)
        residual = np.full(10, 1.0)
        curve = ShirleyTerm().curve(x, residual, np.array([2.0, 0.5]))
        assert curve[0] == pytest.approx(3.0)
        assert curve[-1] == pytest.approx(1.5)

    @pytest.mark.parametrize(
        "term", [LinearTerm, PolynomialTerm, AslsTerm, RollingBallTerm, ShirleyTerm]
    )
    def test_overrides_keep_base_signature(self, term):
        """Subclass curve and describe carry the base annotations."""
        for name in ("curve", "describe"):
            override = getattr(term, name)
            base = getattr(BaselineTerm, name)
            assert override.__annotations__ == base.__annotations__


class TestPeakSumModel:
    """Tests for the peak-only model."""

    def test_matches_component_evaluation(self, x_grid, two_peak_components):
        model = PeakSumModel([c.profile for c in two_peak_components])
        params = pack_components(two_peak_components)
        np.testing.assert_allclose(
            model(x_grid, params), evaluate_components(x_grid, two_peak_components)
        )
        assert model.n_params == 6

    def test_single_component(self, x_grid, two_peak_components):
        model = PeakSumModel([c.profile for c in two_peak_components])
        params = pack_components(two_peak_components)
        assert model.component(x_grid, params, 1).max() == pytest.approx(5.0)


class TestCombinedModel:
    """Tests for the peaks-plus-baseline model."""

    def test_parametric_baseline(self, x_grid, single_gaussian):
        """Linear terms are evaluated directly on x."""
        peaks = PeakSumModel([single_gaussian.profile])
        y = np.zeros_like(x_grid)
        model = CombinedModel(peaks, LinearTerm(), y)
        params = np.concatenate([pack_components([single_gaussian]), [0.1, 2.0]])
        expected = peaks(x_grid, params[:3]) + 0.1 * x_grid + 2.0
        np.testing.assert_allclose(model(x_grid, params), expected)

    def test_residual_baseline(self, x_grid, single_gaussian):
        """Non-parametric terms see the data minus the peaks."""
        peaks = PeakSumModel([single_gaussian.profile])
        params = np.concatenate([pack_components([single_gaussian]), [0.0, 0.0]])
        y = peaks(x_grid, params[:3]) + 0.5
        model = CombinedModel(peaks, ShirleyTerm(), y)
        np.testing.assert_allclose(model.baseline(x_grid, params), 0.5, atol=1e-12)

    def test_peak_sum_cache(self, x_grid, single_gaussian):
        """Changing only baseline values reuses the cached peak sum."""
        peaks = PeakSumModel([single_gaussian.profile])
        model = CombinedModel(peaks, LinearTerm(), np.zeros_like(x_grid))
        params = np.concatenate([pack_components([single_gaussian]), [0.0, 0.0]])
        first = model.peak_sum(x_grid, params)
        params[3] = 1.0
        assert model.peak_sum(x_grid, params) is first
        params[0] = 51.0
        assert model.peak_sum(x_grid, params) is not first
