"""Tests for the phone-bill command."""

import json

import pytest
from click.testing import CliRunner

from tools.phone_bill.cli import main

CALL_LOG = (
    "420607607607,18-11-2021 12:56:00,18-11-2021 13:13:13\n"
    "420721721721,25-10-2021 19:44:00,26-10-2021 01:05:01\n"
    "420721721721,26-10-2021 08:00:00,26-10-2021 08:01:00\n"
)


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def log_file(tmp_path):
    path = tmp_path / "calls.csv"
    path.write_text(CALL_LOG, encoding="utf-8")
    return path


class TestPhoneBillCli:
    """Test phone-bill command."""

    def test_prints_total(self, runner, log_file):
        result = runner.invoke(main, [str(log_file)])

        assert result.exit_code == 0
        assert "Parsed 3 call(s), 1 billed" in result.output
        assert "Total amount to be paid: 7.60 Kč" in result.output

    def test_currency_label(self, runner, log_file):
        result = runner.invoke(main, [str(log_file), "--currency", "CZK"])

        assert result.exit_code == 0
        assert "Total amount to be paid: 7.60 CZK" in result.output

    def test_default_log_file(self, runner):
        """Test that calls.csv in the working directory is used by default."""
        with runner.isolated_filesystem():
            with open("calls.csv", "w", encoding="utf-8") as f:
                f.write(CALL_LOG)

            result = runner.invoke(main, [])

        assert result.exit_code == 0
        assert "Total amount to be paid: 7.60 Kč" in result.output

    def test_details(self, runner, log_file):
        result = runner.invoke(main, [str(log_file), "--details"])

        assert result.exit_code == 0
        assert "Calls (1 billed of 3)" in result.output
        assert "Calls to 420721721721 are free" in result.output
        assert "Total amount to be paid: 7.60 Kč" in result.output

    def test_json_output(self, runner, log_file):
        result = runner.invoke(main, [str(log_file), "--output", "json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["total"] == "7.60"
        assert data["currency"] == "Kč"
        assert data["exempt_number"] == "420721721721"
        assert data["rejected_lines"] == 0
        assert len(data["calls"]) == 3
        assert data["calls"][0]["minutes"] == 18
        assert data["calls"][1]["exempt"] is True

    def test_missing_file(self, runner, tmp_path):
        result = runner.invoke(main, [str(tmp_path / "missing.csv")])

        assert result.exit_code == 1
        assert "Error reading file" in result.output

    def test_skipped_lines_warning(self, runner, tmp_path):
        path = tmp_path / "calls.csv"
        path.write_text(CALL_LOG + "15612,18-11-2021 19:09:55,18-11-2021 22:11:22\n", encoding="utf-8")

        result = runner.invoke(main, [str(path)])

        assert result.exit_code == 0
        assert "Skipped 1 invalid line(s)" in result.output
        assert "Total amount to be paid: 7.60 Kč" in result.output
