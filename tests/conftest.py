"""Pytest fixtures for peakfit1d tests."""

import numpy as np
import pytest

from peakfit1d.core.domain.peaks import PeakComponent, Profile
from peakfit1d.core.domain.spectrum import Spectrum
from peakfit1d.core.lineshapes.functions import evaluate_components


@pytest.fixture
def rng():
    """Seeded random generator."""
    return np.random.default_rng(42)


@pytest.fixture
def x_grid():
    """Uniform grid 0..100 with 0.2 spacing."""
    return np.linspace(0.0, 100.0, 501)


@pytest.fixture
def single_gaussian():
    """Reference Gaussian component."""
    return PeakComponent(id=1, profile=Profile.GAUSSIAN, center=50.0, amplitude=10.0, width=8.0)


@pytest.fixture
def gaussian_spectrum(x_grid, single_gaussian):
    """Noiseless single Gaussian on a zero background."""
    return Spectrum(x_grid, evaluate_components(x_grid, [single_gaussian]))


@pytest.fixture
def two_peak_components():
    """Two well separated peaks of different profiles."""
    return [
        PeakComponent(id=1, profile=Profile.GAUSSIAN, center=30.0, amplitude=8.0, width=6.0),
        PeakComponent(id=2, profile=Profile.LORENTZIAN, center=65.0, amplitude=5.0, width=10.0),
    ]


@pytest.fixture
def noisy_two_peak_spectrum(x_grid, two_peak_components, rng):
    """Two peaks over a sloping background with Gaussian noise."""
    y = evaluate_components(x_grid, two_peak_components)
    y += 0.02 * x_grid + 1.0
    y += rng.normal(0.0, 0.05, x_grid.size)
    return Spectrum(x_grid, y)


@pytest.fixture
def linear_signal(x_grid):
    """Straight line without peaks."""
    return Spectrum(x_grid, 0.5 * x_grid + 2.0)


@pytest.fixture
def sample_config_file(tmp_path):
    """Small TOML configuration file."""
    path = tmp_path / "peakfit1d.toml"
    path.write_text(
        """
[processing]
x_min = 10.0
x_max = 90.0
normalize = true

[processing.smoothing]
enabled = true
window_length = 7
poly_order = 2

[baseline]
method = "asls"
lambda = 1e6
p = 0.005

[fitting]
profile = "lorentzian"
n_peaks = 2
max_iterations = 150
"""
    )
    return path


@pytest.fixture
def data_file(tmp_path, noisy_two_peak_spectrum):
    """Two-column data file with a comment header."""
    path = tmp_path / "data.txt"
    lines = ["# x y", "// generated"]
    lines += [f"{s.x:.6f}\t{s.y:.6f}" for s in noisy_two_peak_spectrum]
    path.write_text("\n".join(lines) + "\n")
    return path
