"""CLI surface tests using typer.testing.CliRunner.

These exercise the commands end to end through Typer's test harness.
"""

from __future__ import annotations

from typer.testing import CliRunner

from cassandratogcs import __version__
from cassandratogcs._constants import (
    DEFAULT_CONFIG,
    INPUT_HOST,
    INPUT_TABLE,
    OUTPUT_PATH,
    OUTPUT_SAVE_MODE,
)
from cassandratogcs.cli import app
from cassandratogcs.config import env_var_name
from tests.conftest import make_properties, write_properties

runner = CliRunner()


# =============================================================================
# version command
# =============================================================================


class TestVersionCommand:
    """Tests for 'cassandratogcs version'."""

    def test_version_output(self):
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert __version__ in result.output


# =============================================================================
# keys command
# =============================================================================


class TestKeysCommand:
    """Tests for 'cassandratogcs keys'."""

    def test_keys_lists_properties(self):
        result = runner.invoke(app, ["keys"])
        assert result.exit_code == 0
        assert "Recognized properties" in result.output


# =============================================================================
# init command
# =============================================================================


class TestInitCommand:
    """Tests for 'cassandratogcs init'."""

    def test_init_creates_file(self, tmp_path):
        output = tmp_path / "job.properties"
        result = runner.invoke(app, ["init", "--output", str(output)])
        assert result.exit_code == 0
        assert OUTPUT_SAVE_MODE in output.read_text()

    def test_init_default_path(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["init"])
        assert result.exit_code == 0
        assert (tmp_path / DEFAULT_CONFIG).exists()

    def test_init_refuses_to_overwrite(self, tmp_path):
        output = tmp_path / "job.properties"
        output.write_text("keep me\n")
        result = runner.invoke(app, ["init", "--output", str(output)])
        assert result.exit_code == 1
        assert output.read_text() == "keep me\n"

    def test_init_force(self, tmp_path):
        output = tmp_path / "job.properties"
        output.write_text("keep me\n")
        result = runner.invoke(app, ["init", "--output", str(output), "--force"])
        assert result.exit_code == 0
        assert output.read_text() != "keep me\n"

    def test_init_then_validate(self, tmp_path):
        output = tmp_path / "job.properties"
        runner.invoke(app, ["init", "--output", str(output)])
        result = runner.invoke(app, ["validate", str(output), "--no-env"])
        assert result.exit_code == 0


# =============================================================================
# validate command
# =============================================================================


class TestValidateCommand:
    """Tests for 'cassandratogcs validate'."""

    def test_valid_file(self, properties_file):
        result = runner.invoke(app, ["validate", str(properties_file), "--no-env"])
        assert result.exit_code == 0
        assert "Configuration valid" in result.output
        assert "Append" in result.output

    def test_verbose_prints_summary(self, properties_file):
        result = runner.invoke(app, ["validate", str(properties_file), "--no-env", "--verbose"])
        assert result.exit_code == 0
        assert "JobConfig{inputTable=t1" in result.output

    def test_reports_every_issue(self, tmp_path):
        path = tmp_path / "job.properties"
        write_properties(path, make_properties({OUTPUT_PATH: "s3://bucket"}, drop=(INPUT_TABLE,)))
        result = runner.invoke(app, ["validate", str(path), "--no-env"])
        assert result.exit_code == 1
        assert f"{INPUT_TABLE}: Required property is missing or empty" in result.output
        assert "MissingRequiredField" in result.output
        assert OUTPUT_PATH in result.output
        assert "PatternMismatch" in result.output

    def test_set_override(self, tmp_path):
        path = tmp_path / "job.properties"
        write_properties(path, make_properties(drop=(INPUT_HOST,)))
        result = runner.invoke(
            app, ["validate", str(path), "--no-env", "--set", f"{INPUT_HOST}=10.0.0.2"]
        )
        assert result.exit_code == 0

    def test_bad_override(self, properties_file):
        result = runner.invoke(app, ["validate", str(properties_file), "--no-env", "--set", "x"])
        assert result.exit_code == 1
        assert "Config error" in result.output

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["validate", str(tmp_path / "nope.properties"), "--no-env"])
        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_missing_file_name_with_markup(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["validate", "[bold]nope.properties", "--no-env"])
        assert result.exit_code == 1
        assert "File not found" in result.output
        assert "[bold]nope.properties" in result.output

    def test_environment(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        env = {env_var_name(key): value for key, value in make_properties().items()}
        result = runner.invoke(app, ["validate"], env=env)
        assert result.exit_code == 0

    def test_no_env_ignores_environment(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        env = {env_var_name(key): value for key, value in make_properties().items()}
        result = runner.invoke(app, ["validate", "--no-env"], env=env)
        assert result.exit_code == 1

    def test_default_config_discovered(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        write_properties(tmp_path / DEFAULT_CONFIG, make_properties())
        result = runner.invoke(app, ["validate", "--no-env"])
        assert result.exit_code == 0
        assert DEFAULT_CONFIG in result.output
