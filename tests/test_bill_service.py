"""Tests for file based billing."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from tools.phone_bill.calculator import BillCalculator
from tools.phone_bill.service import LogReadError, TelephoneBillService, read_log_file

CALL_LOG = (
    "420607607607,18-11-2021 12:56:00,18-11-2021 13:13:13\n"
    "420721721721,25-10-2021 19:44:00,26-10-2021 01:05:01\n"
    "420721721721,26-10-2021 08:00:00,26-10-2021 08:01:00\n"
)


class TestReadLogFile:
    """Test read_log_file."""

    def test_reads_and_trims(self, tmp_path):
        log_file = tmp_path / "calls.csv"
        log_file.write_text("\n  " + CALL_LOG + "\n\n", encoding="utf-8")

        assert read_log_file(log_file) == CALL_LOG.strip()

    def test_missing_file(self, tmp_path):
        """Test that read errors are wrapped."""
        missing = tmp_path / "missing.csv"

        with pytest.raises(LogReadError, match="Error reading file") as exc_info:
            read_log_file(missing)

        assert isinstance(exc_info.value.__cause__, FileNotFoundError)

    def test_decode_error(self, tmp_path):
        log_file = tmp_path / "calls.csv"
        log_file.write_bytes(b"\xff\xfe\xfa")

        with pytest.raises(LogReadError):
            read_log_file(log_file, encoding="utf-8")

    def test_custom_encoding(self, tmp_path):
        log_file = tmp_path / "calls.csv"
        log_file.write_text(CALL_LOG, encoding="utf-16")

        assert read_log_file(log_file, encoding="utf-16") == CALL_LOG.strip()


class TestTelephoneBillService:
    """Test TelephoneBillService."""

    def test_calculate_total_cost(self, tmp_path):
        log_file = tmp_path / "calls.csv"
        log_file.write_text(CALL_LOG, encoding="utf-8")

        service = TelephoneBillService()

        assert service.calculate_total_cost(log_file) == Decimal("7.60")
        assert service.calculate_total_cost(str(log_file)) == Decimal("7.60")

    def test_empty_file(self, tmp_path):
        log_file = tmp_path / "calls.csv"
        log_file.write_text("   \n", encoding="utf-8")

        assert TelephoneBillService().calculate_total_cost(log_file) == Decimal("0.00")

    @pytest.mark.parametrize("file_path", [None, "", "   "])
    def test_invalid_path(self, file_path):
        """Test that blank paths fail before reading."""
        calculator = MagicMock(spec=BillCalculator)
        service = TelephoneBillService(calculator)

        with pytest.raises(ValueError, match="File path must not be null or empty"):
            service.calculate_total_cost(file_path)

        calculator.bill_log.assert_not_called()

    def test_uses_given_calculator(self, tmp_path):
        log_file = tmp_path / "calls.csv"
        log_file.write_text(CALL_LOG, encoding="utf-8")

        calculator = MagicMock(spec=BillCalculator)
        service = TelephoneBillService(calculator)
        service.load_bill(log_file)

        calculator.bill_log.assert_called_once_with(CALL_LOG.strip())

    def test_missing_file(self, tmp_path):
        with pytest.raises(LogReadError):
            TelephoneBillService().calculate_total_cost(tmp_path / "missing.csv")
