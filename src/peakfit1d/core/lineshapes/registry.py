"""Profile registry mapping profile names to evaluation functions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from peakfit1d.core.shared.exceptions import InvalidInputError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from peakfit1d.core.domain.peaks import Profile
    from peakfit1d.core.shared.typing import FloatArray


class ProfileFunction(Protocol):
    """Signature shared by all peak profiles."""

    def __call__(
        self, x: FloatArray, center: float, amplitude: float, sigma: float, gamma: float
    ) -> FloatArray: ...


# Global profile registry
PROFILES: dict[str, ProfileFunction] = {}


def register_profile(
    names: str | Iterable[str],
) -> Callable[[ProfileFunction], ProfileFunction]:
    """Register a profile function under one or more names.

    Example:
        @register_profile("gaussian")
        def gaussian(x, center, amplitude, sigma, gamma=0.0):
            ...
    """
    if isinstance(names, str):
        names = [names]

    def decorator(func: ProfileFunction) -> ProfileFunction:
        for name in names:
            PROFILES[name] = func
        return func

    return decorator


def get_profile(name: str | Profile) -> ProfileFunction:
    """Get a profile function by name.

    Raises
    ------
        InvalidInputError: If the profile name is not registered
    """
    key = getattr(name, "value", name)
    try:
        return PROFILES[key]
    except KeyError:
        msg = f"Unknown profile '{key}'. Available: {', '.join(sorted(PROFILES))}"
        raise InvalidInputError(msg) from None


def list_profiles() -> list[str]:
    """List all registered profile names."""
    return list(PROFILES.keys())
