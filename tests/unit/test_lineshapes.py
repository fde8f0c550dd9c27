"""Test peak profile functions."""

import numpy as np
import pytest

from peakfit1d.core.domain.peaks import PeakComponent, Profile
from peakfit1d.core.lineshapes import (
    evaluate_component,
    evaluate_components,
    gaussian,
    get_profile,
    list_profiles,
    lorentzian,
    pvoigt,
)
from peakfit1d.core.shared.exceptions import InvalidInputError


class TestGaussian:
    """Tests for the Gaussian profile."""

    def test_peak_height(self):
        """Gaussian should equal the amplitude at its center."""
        assert gaussian(np.array([3.0]), 3.0, 7.5, 1.2)[0] == pytest.approx(7.5)

    def test_half_maximum(self):
        """Gaussian with sigma = FWHM/2.355 is ~0.5 at FWHM/2."""
        fwhm = 10.0
        value = gaussian(np.array([fwhm / 2]), 0.0, 1.0, fwhm / 2.355)[0]
        assert value == pytest.approx(0.5, rel=1e-3)

    def test_symmetry(self):
        """Gaussian should be symmetric around its center."""
        result = gaussian(np.array([-5.0, 5.0]), 0.0, 1.0, 2.0)
        assert result[0] == pytest.approx(result[1])

    def test_zero_sigma_is_finite(self):
        """A zero width must not produce NaN."""
        result = gaussian(np.array([0.0, 1.0]), 0.0, 1.0, 0.0)
        assert np.all(np.isfinite(result))


class TestLorentzian:
    """Tests for the Lorentzian profile."""

    def test_peak_height(self):
        """Lorentzian should equal the amplitude at its center."""
        assert lorentzian(np.array([2.0]), 2.0, 4.0, 0.0, 1.5)[0] == pytest.approx(4.0)

    def test_half_maximum(self):
        """Lorentzian is exactly 0.5 at gamma from the center."""
        assert lorentzian(np.array([3.0]), 0.0, 1.0, 0.0, 3.0)[0] == pytest.approx(0.5)


class TestPseudoVoigt:
    """Tests for the pseudo-Voigt mixture."""

    def test_peak_height(self):
        """Both sub-shapes are unit height, so the mixture equals amplitude."""
        assert pvoigt(np.array([1.0]), 1.0, 3.0, 0.8, 1.1)[0] == pytest.approx(3.0)

    def test_mixing_fraction(self):
        """eta = gamma / (sigma + gamma) weights the Lorentzian part."""
        x = np.array([2.5])
        sigma, gamma = 1.0, 3.0
        eta = gamma / (sigma + gamma)
        expected = eta * lorentzian(x, 0.0, 1.0, sigma, gamma) + (1 - eta) * gaussian(
            x, 0.0, 1.0, sigma, gamma
        )
        assert pvoigt(x, 0.0, 2.0, sigma, gamma)[0] == pytest.approx(2.0 * expected[0])


class TestComponentEvaluation:
    """Tests for evaluating PeakComponent objects."""

    @pytest.mark.parametrize("profile", list(Profile))
    @pytest.mark.parametrize("width", [0.05, 1.0, 37.0])
    def test_value_at_center_is_weighted_amplitude(self, profile, width):
        """Peak value at the center equals amplitude x weight."""
        component = PeakComponent(
            profile=profile, center=12.0, amplitude=4.0, width=width, weight=0.25
        )
        assert evaluate_component(np.array([12.0]), component)[0] == pytest.approx(1.0)

    def test_sigma_override(self):
        """An explicit sigma replaces the FWHM-derived value."""
        component = PeakComponent(center=0.0, amplitude=1.0, width=10.0, sigma=1.0)
        value = evaluate_component(np.array([1.0]), component)[0]
        assert value == pytest.approx(np.exp(-0.5))

    def test_sum_of_components(self):
        """Component curves add up."""
        x = np.linspace(-5, 5, 11)
        a = PeakComponent(center=-1.0, amplitude=1.0, width=2.0)
        b = PeakComponent(profile=Profile.LORENTZIAN, center=2.0, amplitude=0.5, width=1.0)
        np.testing.assert_allclose(
            evaluate_components(x, [a, b]),
            evaluate_component(x, a) + evaluate_component(x, b),
        )


class TestRegistry:
    """Tests for the profile registry."""

    def test_registered_profiles(self):
        """All three profiles should be registered."""
        assert set(list_profiles()) >= {"gaussian", "lorentzian", "voigt"}

    def test_lookup_by_enum(self):
        """Profiles can be looked up by enum member."""
        assert get_profile(Profile.VOIGT) is pvoigt

    def test_unknown_profile(self):
        """Unknown names raise InvalidInputError."""
        with pytest.raises(InvalidInputError, match="Unknown profile"):
            get_profile("sp3")
