"""Unit tests for the command line interface."""

import json
import os
from unittest.mock import patch

import pytest
from click.testing import CliRunner
from json_monitor.cli import ConsoleReporter, build_sample_document, main
from json_monitor.config import MonitorConfig, set_config
from json_monitor.models import DataLoadedEvent, RootDocument
from rich.console import Console


@pytest.fixture(autouse=True)
def cli_environment():
    """Use default settings and leave the process logging setup alone."""
    set_config(MonitorConfig(_env_file=None))
    with patch("json_monitor.cli.configure_logging"):
        yield
    set_config(None)


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def data_file(tmp_path):
    path = tmp_path / "tools.json"
    path.write_text(json.dumps(build_sample_document()), encoding="utf-8")
    return path


class TestSampleCommand:
    """Test cases for the sample command."""

    def test_writes_sample(self, runner, tmp_path):
        """Test a sample file is created and parses back."""
        target = tmp_path / "out" / "tools.json"

        result = runner.invoke(main, ["sample", str(target)])

        assert result.exit_code == 0
        data = json.loads(target.read_text(encoding="utf-8"))
        assert data["title"] == "Garden Tools Connection Monitor"
        assert [item["name"] for item in data["items"]][0] == "Chainsaw"

    def test_refuses_overwrite(self, runner, data_file):
        """Test an existing file is kept without --force."""
        before = data_file.read_text(encoding="utf-8")

        result = runner.invoke(main, ["sample", str(data_file)])

        assert result.exit_code == 1
        assert "already exists" in result.output
        assert data_file.read_text(encoding="utf-8") == before

    def test_force_overwrite(self, runner, data_file):
        """Test --force replaces an existing file."""
        data_file.write_text("{}", encoding="utf-8")

        result = runner.invoke(main, ["sample", "--force", str(data_file)])

        assert result.exit_code == 0
        assert "Chainsaw" in data_file.read_text(encoding="utf-8")


class TestShowCommand:
    """Test cases for the show command."""

    def test_show_document(self, runner, data_file):
        """Test items are printed."""
        result = runner.invoke(main, ["show", str(data_file)])

        assert result.exit_code == 0
        assert "Chainsaw" in result.output
        assert "Leaf Blower" in result.output

    def test_show_missing_file(self, runner, tmp_path):
        """Test a missing file exits with an error status."""
        result = runner.invoke(main, ["show", str(tmp_path / "missing.json")])

        assert result.exit_code == 1
        assert "Could not load" in result.output

    def test_show_configured_default_path(self, runner, data_file):
        """Test PATH falls back to the configured default file."""
        set_config(MonitorConfig(_env_file=None, default_file_path=data_file))

        result = runner.invoke(main, ["show"])

        assert result.exit_code == 0
        assert "Chainsaw" in result.output

    def test_show_without_any_path(self, runner):
        """Test a usage error when no path is available."""
        result = runner.invoke(main, ["show"])

        assert result.exit_code == 2
        assert "No PATH given" in result.output


class TestWatchCommand:
    """Test cases for the watch command."""

    def test_watch_for_duration(self, runner, data_file):
        """Test watching stops by itself after --duration."""
        os.utime(data_file, (1_700_000_000, 1_700_000_000))

        result = runner.invoke(main, ["watch", str(data_file), "--interval", "0.05", "--duration", "0.2"])

        assert result.exit_code == 0
        assert "Monitoring started" in result.output
        assert "Monitoring stopped" in result.output
        assert "Chainsaw" in result.output
        assert "1 load(s), 0 error(s)" in result.output

    def test_watch_rejects_non_positive_interval(self, runner, data_file):
        """Test an invalid interval is a usage error."""
        result = runner.invoke(main, ["watch", str(data_file), "--interval", "0"])

        assert result.exit_code == 2
        assert "Interval must be positive" in result.output


class TestConsoleReporter:
    """Test cases for ConsoleReporter."""

    def test_counts_loads(self):
        """Test loads with and without a document are counted."""
        output = Console(record=True, width=120)
        reporter = ConsoleReporter(output)

        reporter.on_data_loaded(DataLoadedEvent(document=RootDocument(title="Tools"), was_forced=True))
        reporter.on_data_loaded(DataLoadedEvent(document=None, was_forced=False))

        text = output.export_text()
        assert reporter.loads == 2
        assert "refreshed manually" in text
        assert "could not be loaded" in text
