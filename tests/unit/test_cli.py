"""Unit tests for the errchain CLI."""

import json
from pathlib import Path

from typer.testing import CliRunner

from errchain import __version__, create_error_collector, new_base, wrap
from errchain.cli import app
from errchain.config import ErrchainConfig, LocationConfig, set_config


def write_dump(path: Path, data: dict) -> Path:
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def sample_dump() -> dict:
    set_config(ErrchainConfig(location=LocationConfig(enabled=False)))
    return wrap(ValueError("disk full"), "save failed").add_baggage({"file": "a.txt"}).to_dict()


class TestCLI:
    """Test CLI commands."""

    def test_version(self):
        runner = CliRunner()
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_codes(self):
        """Test that every axis is listed."""
        runner = CliRunner()
        result = runner.invoke(app, ["codes"])
        assert result.exit_code == 0
        assert "NOT_FOUND" in result.stdout
        assert "404" in result.stdout
        assert "USE_CASE" in result.stdout
        assert "PANIC" in result.stdout

    def test_show_text(self, tmp_path):
        dump = write_dump(tmp_path / "trace.json", sample_dump())
        runner = CliRunner()
        result = runner.invoke(app, ["show", str(dump)])

        assert result.exit_code == 0
        assert "save failed" in result.stdout
        assert "disk full" in result.stdout

    def test_show_json(self, tmp_path):
        data = sample_dump()
        dump = write_dump(tmp_path / "trace.json", data)
        runner = CliRunner()
        result = runner.invoke(app, ["show", str(dump), "--format", "json"])

        assert result.exit_code == 0
        assert json.loads(result.stdout) == data

    def test_show_no_baggage(self, tmp_path):
        dump = write_dump(tmp_path / "trace.json", sample_dump())
        runner = CliRunner()
        result = runner.invoke(app, ["show", str(dump), "--no-baggage"])

        assert result.exit_code == 0
        assert "file=a.txt" not in result.stdout

    def test_show_format_from_config(self, tmp_path):
        """Test that the report format falls back to the config file."""
        dump = write_dump(tmp_path / "trace.json", sample_dump())
        config = write_dump(tmp_path / ".errchain.json", {"report": {"format": "json"}})
        runner = CliRunner()
        result = runner.invoke(app, ["show", str(dump), "--config", str(config)])

        assert result.exit_code == 0
        assert json.loads(result.stdout)["stack"][-1] == {"message": "disk full"}

    def test_show_collector(self, tmp_path):
        collector = create_error_collector()
        collector.add_err(new_base("first"))
        collector.add_err(new_base("second"))
        dump = write_dump(tmp_path / "report.json", collector.to_dict())

        runner = CliRunner()
        result = runner.invoke(app, ["show", str(dump)])

        assert result.exit_code == 0
        assert "Collected errors: 2" in result.stdout

    def test_show_missing_file(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(app, ["show", str(tmp_path / "missing.json")])
        assert result.exit_code == 1
        assert "File not found" in result.stdout

    def test_show_invalid_json(self, tmp_path):
        dump = tmp_path / "broken.json"
        dump.write_text("{not json", encoding="utf-8")
        runner = CliRunner()
        result = runner.invoke(app, ["show", str(dump)])
        assert result.exit_code == 1
        assert "Invalid JSON" in result.stdout

    def test_show_invalid_format(self, tmp_path):
        dump = write_dump(tmp_path / "trace.json", sample_dump())
        runner = CliRunner()
        result = runner.invoke(app, ["show", str(dump), "--format", "yaml"])
        assert result.exit_code == 1
        assert "Invalid format" in result.stdout

    def test_show_bracketed_message(self, tmp_path):
        """Test that bracketed error text does not break text output."""
        set_config(ErrchainConfig(location=LocationConfig(enabled=False)))
        data = wrap(ValueError("pattern [/a-z] rejected"), "validate failed").to_dict()
        dump = write_dump(tmp_path / "trace.json", data)

        runner = CliRunner()
        result = runner.invoke(app, ["show", str(dump)])

        assert result.exit_code == 0
        assert "pattern [/a-z] rejected" in result.stdout

    def test_codes_without_config_file(self, tmp_path, monkeypatch):
        """Test the default logging level when no config file exists."""
        monkeypatch.chdir(tmp_path)
        runner = CliRunner()
        result = runner.invoke(app, ["codes"])
        assert result.exit_code == 0
