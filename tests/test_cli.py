"""Tests for triggerforge CLI commands."""

import pytest
from click.testing import CliRunner

from triggerforge.cli.main import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ("TRIGGERFORGE_BYPASS_FILE", "TRIGGERFORGE_BATCH_SIZE", "TRIGGERFORGE_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def bypass_file(tmp_path):
    path = tmp_path / "bypasses.yaml"
    path.write_text(
        "bypasses:\n"
        "  - developerName: AccountHandler\n"
        "    active: true\n"
        "  - developerName: sendWelcomeEmail\n"
        "    active: false\n"
    )
    return path


class TestBypassValidate:
    def test_valid_file(self, runner, bypass_file):
        result = runner.invoke(cli, ["bypass", "validate", str(bypass_file)])
        assert result.exit_code == 0
        assert "Bypass file is valid (2 entries, 1 active)" in result.output

    def test_invalid_file_exits_1(self, runner, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("bypasses:\n  - active: true\n")
        result = runner.invoke(cli, ["bypass", "validate", str(path)])
        assert result.exit_code == 1
        assert "developerName" in result.output
        assert "1 error(s) found" in result.output

    def test_uses_env_file(self, runner, bypass_file, monkeypatch):
        monkeypatch.setenv("TRIGGERFORGE_BYPASS_FILE", str(bypass_file))
        result = runner.invoke(cli, ["bypass", "validate"])
        assert result.exit_code == 0

    def test_env_file_missing(self, runner, tmp_path, monkeypatch):
        monkeypatch.setenv("TRIGGERFORGE_BYPASS_FILE", str(tmp_path / "missing.yaml"))
        result = runner.invoke(cli, ["bypass", "validate"])
        assert result.exit_code == 1
        assert "does not exist" in result.output

    def test_no_file_configured(self, runner):
        result = runner.invoke(cli, ["bypass", "validate"])
        assert result.exit_code == 1
        assert "TRIGGERFORGE_BYPASS_FILE" in result.output


class TestBypassList:
    def test_lists_active(self, runner, bypass_file):
        result = runner.invoke(cli, ["bypass", "list", str(bypass_file)])
        assert result.exit_code == 0
        assert "AccountHandler" in result.output
        assert "sendWelcomeEmail" not in result.output

    def test_lists_all(self, runner, bypass_file):
        result = runner.invoke(cli, ["bypass", "list", "--all", str(bypass_file)])
        assert "AccountHandler (active)" in result.output
        assert "sendWelcomeEmail (inactive)" in result.output

    def test_env_file_missing(self, runner, tmp_path, monkeypatch):
        monkeypatch.setenv("TRIGGERFORGE_BYPASS_FILE", str(tmp_path / "missing.yaml"))
        result = runner.invoke(cli, ["bypass", "list"])
        assert result.exit_code == 1
        assert "does not exist" in result.output
        assert "No active bypasses." not in result.output

    def test_no_active(self, runner, tmp_path):
        path = tmp_path / "none.yaml"
        path.write_text("bypasses: []\n")
        result = runner.invoke(cli, ["bypass", "list", str(path)])
        assert result.exit_code == 0
        assert "No active bypasses." in result.output

    def test_malformed_file(self, runner, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("- AccountHandler\n")
        result = runner.invoke(cli, ["bypass", "list", str(path)])
        assert result.exit_code == 1
        assert "Error:" in result.output


class TestBatches:
    def test_default_batch_size(self, runner):
        result = runner.invoke(cli, ["batches", "450"])
        assert result.exit_code == 0
        assert "3 batch(es)" in result.output
        assert "Handler runs per operation: 6" in result.output

    def test_custom_batch_size(self, runner):
        result = runner.invoke(cli, ["batches", "450", "--batch-size", "100", "--phases", "1"])
        assert "5 batch(es)" in result.output
        assert "Handler runs per operation: 5" in result.output

    def test_env_batch_size(self, runner, monkeypatch):
        monkeypatch.setenv("TRIGGERFORGE_BATCH_SIZE", "50")
        result = runner.invoke(cli, ["batches", "120"])
        assert "3 batch(es)" in result.output

    def test_rejects_zero_batch_size(self, runner):
        result = runner.invoke(cli, ["batches", "10", "--batch-size", "0"])
        assert result.exit_code != 0
