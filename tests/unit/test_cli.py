"""Test CLI commands."""

import json

from typer.testing import CliRunner

from peakfit1d import __version__
from peakfit1d.cli.app import app

runner = CliRunner()


class TestCLIHelp:
    """Tests for CLI help messages."""

    def test_main_help(self):
        """Main command should list the subcommands."""
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "peakfit1d" in result.stdout
        assert "fit" in result.stdout
        assert "baseline" in result.stdout
        assert "init" in result.stdout

    def test_fit_help(self):
        result = runner.invoke(app, ["fit", "--help"])
        assert result.exit_code == 0
        assert "--peaks" in result.stdout
        assert "--baseline" in result.stdout
        assert "--output" in result.stdout

    def test_baseline_help(self):
        result = runner.invoke(app, ["baseline", "--help"])
        assert result.exit_code == 0
        assert "--method" in result.stdout

    def test_init_help(self):
        result = runner.invoke(app, ["init", "--help"])
        assert result.exit_code == 0
        assert "configuration" in result.stdout.lower()

    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout


class TestInitCommand:
    """Tests for init command."""

    def test_init_creates_file(self, tmp_path):
        config_path = tmp_path / "test_config.toml"
        result = runner.invoke(app, ["init", str(config_path)])
        assert result.exit_code == 0
        assert config_path.exists()
        assert "Created" in result.stdout
        assert "[baseline]" in config_path.read_text()

    def test_init_refuses_overwrite(self, tmp_path):
        config_path = tmp_path / "test_config.toml"
        config_path.write_text("# mine\n")
        result = runner.invoke(app, ["init", str(config_path)])
        assert result.exit_code == 1
        assert "already exists" in result.stdout
        assert config_path.read_text() == "# mine\n"

    def test_init_force(self, tmp_path):
        config_path = tmp_path / "test_config.toml"
        config_path.write_text("# mine\n")
        result = runner.invoke(app, ["init", str(config_path), "--force"])
        assert result.exit_code == 0
        assert "[fitting]" in config_path.read_text()


class TestFitCommand:
    """Tests for fit command."""

    def test_fit_to_json(self, tmp_path, data_file):
        output = tmp_path / "fit.json"
        result = runner.invoke(
            app, ["fit", str(data_file), "-n", "2", "-b", "linear", "-o", str(output)]
        )
        assert result.exit_code == 0, result.stdout
        data = json.loads(output.read_text())
        assert [round(p["center"]) for p in data["parameters"]] == [30, 65]
        assert data["statistics"]["r_squared"] > 0.9

    def test_fit_to_csv_with_config(self, tmp_path, data_file, sample_config_file):
        output = tmp_path / "fit.csv"
        result = runner.invoke(
            app, ["fit", str(data_file), "-c", str(sample_config_file), "-o", str(output)]
        )
        assert result.exit_code == 0, result.stdout
        header = output.read_text().splitlines()[0].split(",")
        assert header[:2] == ["x", "y_raw"]
        assert header[-2:] == ["peak_1", "peak_2"]

    def test_invalid_baseline(self, data_file):
        result = runner.invoke(app, ["fit", str(data_file), "-b", "spline"])
        assert result.exit_code == 2

    def test_unsupported_output(self, tmp_path, data_file):
        result = runner.invoke(app, ["fit", str(data_file), "-o", str(tmp_path / "fit.xlsx")])
        assert result.exit_code == 1
        assert "Unsupported output format" in result.stdout

    def test_invalid_config(self, tmp_path, data_file):
        config = tmp_path / "bad.toml"
        config.write_text("[fitting]\nn_peaks = 0\n")
        result = runner.invoke(app, ["fit", str(data_file), "-c", str(config)])
        assert result.exit_code == 1
        assert "Invalid configuration" in result.stdout

    def test_log_file(self, tmp_path, data_file):
        log_file = tmp_path / "session.json"
        result = runner.invoke(app, ["fit", str(data_file), "--log-file", str(log_file)])
        assert result.exit_code == 0, result.stdout
        records = [json.loads(line) for line in log_file.read_text().splitlines() if line]
        assert records
        assert all(record["logger"].startswith("peakfit1d") for record in records)


class TestBaselineCommand:
    """Tests for baseline command."""

    def test_baseline_to_csv(self, tmp_path, data_file):
        output = tmp_path / "baseline.csv"
        result = runner.invoke(app, ["baseline", str(data_file), "-m", "asls", "-o", str(output)])
        assert result.exit_code == 0, result.stdout
        lines = output.read_text().splitlines()
        assert lines[0] == "x,baseline"
        assert len(lines) == 502

    def test_baseline_to_stdout(self, data_file):
        result = runner.invoke(app, ["baseline", str(data_file), "-m", "linear"])
        assert result.exit_code == 0
        assert "Baseline" in result.stdout

    def test_invalid_method(self, data_file):
        result = runner.invoke(app, ["baseline", str(data_file), "-m", "spline"])
        assert result.exit_code == 2

    def test_unwritable_output(self, tmp_path, data_file):
        """An output path below an existing file is reported, not raised."""
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        output = blocker / "baseline.csv"
        result = runner.invoke(app, ["baseline", str(data_file), "-o", str(output)])
        assert result.exit_code == 1
        assert not isinstance(result.exception, OSError)
