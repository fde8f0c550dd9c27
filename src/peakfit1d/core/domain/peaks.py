"""Peak components: the user-editable description of each fitted peak."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Annotated

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from collections.abc import Sequence

    from peakfit1d.core.shared.typing import FloatArray

FWHM_TO_SIGMA = 2.355
FWHM_TO_GAMMA = 2.0
MIN_WIDTH = 0.01


class Profile(str, Enum):
    """Peak profile families."""

    GAUSSIAN = "gaussian"
    LORENTZIAN = "lorentzian"
    VOIGT = "voigt"


class PeakComponent(BaseModel):
    """A single peak: profile, position, height and FWHM.

    ``sigma`` and ``gamma`` override the values derived from ``width`` when
    set. ``weight`` scales the amplitude; weights are normalised by the caller.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: int = 1
    profile: Profile = Profile.GAUSSIAN
    center: float
    amplitude: float
    width: Annotated[float, Field(gt=0, description="Full width at half maximum")]
    weight: Annotated[float, Field(ge=0.0, le=2.0)] = 1.0
    sigma: Annotated[float, Field(gt=0)] | None = None
    gamma: Annotated[float, Field(gt=0)] | None = None

    @property
    def effective_amplitude(self) -> float:
        """Amplitude scaled by the component weight."""
        return self.amplitude * self.weight

    @property
    def effective_sigma(self) -> float:
        """Gaussian standard deviation (override or FWHM/2.355)."""
        return self.sigma if self.sigma else self.width / FWHM_TO_SIGMA

    @property
    def effective_gamma(self) -> float:
        """Lorentzian half width (override or FWHM/2)."""
        return self.gamma if self.gamma else self.width / FWHM_TO_GAMMA


def relative_weights(components: Sequence[PeakComponent]) -> FloatArray:
    """Return each effective amplitude as a fraction of the total.

    All weights are zero when the total amplitude is zero.
    """
    amplitudes = np.array([c.effective_amplitude for c in components], dtype=float)
    total = float(np.sum(amplitudes))
    if total <= 0.0:
        return np.zeros_like(amplitudes)
    return amplitudes / total


def with_relative_weights(components: Sequence[PeakComponent]) -> list[PeakComponent]:
    """Recompute component weights as fractions of the total amplitude.

    Amplitudes are rescaled so that each component's effective amplitude
    is unchanged.
    """
    weights = relative_weights(components)
    updated = []
    for comp, weight in zip(components, weights, strict=True):
        if weight > 0.0:
            amplitude = comp.effective_amplitude / weight
        else:
            amplitude = comp.amplitude
        updated.append(comp.model_copy(update={"weight": float(weight), "amplitude": amplitude}))
    return updated
