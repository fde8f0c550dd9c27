"""Test configuration models and TOML files."""

import tomllib

import pytest
from pydantic import ValidationError

from peakfit1d.core.domain.config import (
    BaselineOptions,
    FitConfig,
    PeakFit1DConfig,
    ProcessingOptions,
)
from peakfit1d.core.domain.peaks import Profile
from peakfit1d.core.shared.exceptions import ConfigError
from peakfit1d.io.config import generate_default_config, load_config, save_config


class TestModels:
    """Tests for the configuration models."""

    def test_defaults(self):
        config = PeakFit1DConfig()
        assert config.baseline.method == "none"
        assert not config.baseline.optimize_simultaneously
        assert config.fitting.max_iterations == 200
        assert config.fitting.profile is Profile.GAUSSIAN
        assert config.processing.smoothing.enabled is False

    def test_extra_fields_forbidden(self):
        with pytest.raises(ValidationError):
            FitConfig(n_peak=3)

    def test_unknown_baseline_method(self):
        with pytest.raises(ValidationError):
            BaselineOptions(method="spline")

    @pytest.mark.parametrize("field", [{"p": 0.0}, {"p": 1.0}, {"lam": 0.0}, {"degree": -1}])
    def test_baseline_bounds(self, field):
        with pytest.raises(ValidationError):
            BaselineOptions(**field)

    def test_crop_order(self):
        """x_min must not exceed x_max."""
        with pytest.raises(ValidationError, match="x_min"):
            PeakFit1DConfig(processing=ProcessingOptions(x_min=5.0, x_max=1.0))

    def test_calc_range_flag(self):
        assert not BaselineOptions().has_calc_range
        assert BaselineOptions(calc_range_max=3.0).has_calc_range

    def test_lambda_name(self):
        """AsLS smoothness is exposed as 'lambda' in files and 'lam' in code."""
        options = BaselineOptions.model_validate({"lambda": 1e7})
        assert options.lam == 1e7
        assert BaselineOptions(lam=2.0).model_dump(by_alias=True)["lambda"] == 2.0


class TestLoadConfig:
    """Tests for reading configuration files."""

    def test_load(self, sample_config_file):
        config = load_config(sample_config_file)
        assert config.processing.x_min == 10.0
        assert config.processing.normalize
        assert config.processing.smoothing.window_length == 7
        assert config.baseline.method == "asls"
        assert config.baseline.lam == 1e6
        assert config.baseline.p == 0.005
        assert config.fitting.profile is Profile.LORENTZIAN
        assert config.fitting.n_peaks == 2

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "missing.toml")

    def test_invalid_toml(self, tmp_path):
        path = tmp_path / "bad.toml"
        path.write_text("[baseline\nmethod = ")
        with pytest.raises(ConfigError, match="Invalid TOML"):
            load_config(path)

    def test_invalid_values(self, tmp_path):
        path = tmp_path / "bad.toml"
        path.write_text('[baseline]\nmethod = "spline"\n')
        with pytest.raises(ConfigError, match="Invalid configuration"):
            load_config(path)


class TestSaveConfig:
    """Tests for writing configuration files."""

    def test_round_trip(self, tmp_path, sample_config_file):
        config = load_config(sample_config_file)
        config = config.model_copy(
            update={
                "baseline": config.baseline.model_copy(
                    update={"manual_points": [(0.0, 1.0), (5.0, 2.0)]}
                )
            }
        )
        path = tmp_path / "saved.toml"
        save_config(config, path)
        assert "lambda" in path.read_text()
        assert load_config(path).model_dump() == config.model_dump()

    def test_default_template(self):
        """The generated template parses to the default configuration."""
        data = tomllib.loads(generate_default_config())
        parsed = PeakFit1DConfig.model_validate(data)
        assert parsed.model_dump() == PeakFit1DConfig().model_dump()
