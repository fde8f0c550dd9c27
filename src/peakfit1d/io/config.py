"""TOML configuration files."""

from __future__ import annotations

import tomllib
from typing import TYPE_CHECKING

import tomli_w
from pydantic import ValidationError

from peakfit1d.core.domain.config import PeakFit1DConfig
from peakfit1d.core.shared.exceptions import ConfigError

if TYPE_CHECKING:
    from pathlib import Path


def load_config(path: Path) -> PeakFit1DConfig:
    """Load and validate a configuration file.

    Args:
        path: Path to the TOML configuration file

    Returns
    -------
        Validated configuration

    Raises
    ------
        ConfigError: If the file is missing, is not valid TOML or fails validation
    """
    if not path.exists():
        msg = f"Configuration file not found: {path}"
        raise ConfigError(msg)

    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise ConfigError(msg) from exc

    try:
        return PeakFit1DConfig.model_validate(data)
    except ValidationError as exc:
        msg = f"Invalid configuration in {path}:\n{exc}"
        raise ConfigError(msg) from exc


def save_config(config: PeakFit1DConfig, path: Path) -> None:
    """Write ``config`` as TOML, omitting unset optional values."""
    data = config.model_dump(mode="json", exclude_none=True, by_alias=True)
    with path.open("wb") as f:
        tomli_w.dump(data, f)


def generate_default_config() -> str:
    """Return a commented default configuration."""
    return """# peakfit1d configuration file
# Generated automatically - edit as needed

[processing]
# x_min = 0.0
# x_max = 100.0
# interpolation_step = 0.1  # resample onto a uniform grid
normalize = false

[processing.smoothing]
enabled = false
window_length = 11  # odd, >= 3
poly_order = 3

[processing.outlier_removal]
method = "none"  # none, zscore, iqr
threshold = 3.0

[baseline]
method = "none"  # none, linear, polynomial, asls, rolling_ball, shirley, manual
auto_baseline = true
optimize_simultaneously = false
degree = 2             # polynomial
lambda = 1e5           # asls smoothness
p = 0.01               # asls asymmetry
radius = 10            # rolling_ball, in samples
shirley_iterations = 50
shirley_tolerance = 1e-5
# calc_range_min = 0.0
# calc_range_max = 100.0
# manual_points = [[0.0, 0.0], [100.0, 1.0]]
manual_interp = "linear"  # linear, cubic

[fitting]
profile = "gaussian"  # gaussian, lorentzian, voigt
n_peaks = 1
initializer = "gmm"   # gmm (local maxima), even
max_iterations = 200
tolerance = 1e-8
"""
