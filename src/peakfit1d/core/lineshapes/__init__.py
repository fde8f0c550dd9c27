"""Peak profile functions and their registry."""

from peakfit1d.core.lineshapes.functions import (
    evaluate_component,
    evaluate_components,
    gaussian,
    lorentzian,
    pvoigt,
)
from peakfit1d.core.lineshapes.registry import get_profile, list_profiles, register_profile

__all__ = [
    "evaluate_component",
    "evaluate_components",
    "gaussian",
    "get_profile",
    "list_profiles",
    "lorentzian",
    "pvoigt",
    "register_profile",
]
