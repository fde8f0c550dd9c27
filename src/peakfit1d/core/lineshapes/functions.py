"""Vectorised peak profiles.

All profiles are height-parameterised: the value at ``x == center`` equals
``amplitude``.

* Gaussian:      ``A exp(-(x-c)^2 / (2 sigma^2))``, ``sigma = FWHM / 2.355``
* Lorentzian:    ``A gamma^2 / ((x-c)^2 + gamma^2)``, ``gamma = FWHM / 2``
* Pseudo-Voigt:  ``A (eta L + (1-eta) G)`` with unit-height ``L``/``G`` and
  ``eta = gamma / (sigma + gamma)``

The pseudo-Voigt mixing fraction is a width-ratio approximation, not the
FWHM-based eta of the Thompson-Cox-Hastings formula. It is kept as is so
fitted parameters stay comparable with earlier results.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from peakfit1d.core.lineshapes.registry import get_profile, register_profile

if TYPE_CHECKING:
    from collections.abc import Sequence

    from peakfit1d.core.domain.peaks import PeakComponent
    from peakfit1d.core.shared.typing import FloatArray

# Scale floor keeping the profile denominators non-zero
_MIN_SCALE = 1e-12


@register_profile("gaussian")
def gaussian(
    x: FloatArray, center: float, amplitude: float, sigma: float, gamma: float = 0.0
) -> FloatArray:
    """Evaluate a Gaussian of height ``amplitude`` and standard deviation ``sigma``."""
    sigma = max(sigma, _MIN_SCALE)
    dx = np.asarray(x, dtype=float) - center
    return amplitude * np.exp(-(dx * dx) / (2.0 * sigma * sigma))


@register_profile("lorentzian")
def lorentzian(
    x: FloatArray, center: float, amplitude: float, sigma: float, gamma: float = 0.0
) -> FloatArray:
    """Evaluate a Lorentzian of height ``amplitude`` and half width ``gamma``."""
    gamma = max(gamma, _MIN_SCALE)
    dx = np.asarray(x, dtype=float) - center
    gamma2 = gamma * gamma
    return amplitude * gamma2 / (dx * dx + gamma2)


@register_profile("voigt")
def pvoigt(
    x: FloatArray, center: float, amplitude: float, sigma: float, gamma: float
) -> FloatArray:
    """Evaluate the pseudo-Voigt mixture of unit-height Lorentzian and Gaussian."""
    sigma = max(sigma, _MIN_SCALE)
    gamma = max(gamma, _MIN_SCALE)
    eta = gamma / (sigma + gamma)
    lor = lorentzian(x, center, 1.0, sigma, gamma)
    gau = gaussian(x, center, 1.0, sigma, gamma)
    return amplitude * (eta * lor + (1.0 - eta) * gau)


def evaluate_component(x: FloatArray, component: PeakComponent) -> FloatArray:
    """Evaluate a peak component, honouring its weight and sigma/gamma overrides."""
    func = get_profile(component.profile)
    return func(
        x,
        component.center,
        component.effective_amplitude,
        component.effective_sigma,
        component.effective_gamma,
    )


def evaluate_components(x: FloatArray, components: Sequence[PeakComponent]) -> FloatArray:
    """Sum of all component curves on ``x``."""
    total = np.zeros_like(np.asarray(x, dtype=float))
    for component in components:
        total += evaluate_component(x, component)
    return total
