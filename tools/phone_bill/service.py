"""Reading call logs from disk and billing them."""

from decimal import Decimal
from pathlib import Path
from typing import Optional, Union

from shared.logger import get_logger

from .calculator import Bill, BillCalculator

logger = get_logger(__name__)

PathLike = Union[str, Path]


class LogReadError(RuntimeError):
    """The call log could not be read."""


def read_log_file(file_path: PathLike, encoding: str = "utf-8") -> str:
    """
    Read a whole log file.

    Args:
        file_path: Path to the log file
        encoding: File encoding

    Returns:
        File content with outer whitespace trimmed

    Raises:
        LogReadError: If the file cannot be read or decoded
    """
    try:
        content = Path(file_path).read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as e:
        raise LogReadError(f"Error reading file: {file_path}") from e

    logger.debug(f"Read {len(content)} characters from {file_path}")
    return content.strip()


class TelephoneBillService:
    """Bill call logs stored in files."""

    def __init__(self, calculator: Optional[BillCalculator] = None):
        self.calculator = calculator or BillCalculator()

    def load_bill(self, file_path: Optional[PathLike], encoding: str = "utf-8") -> Bill:
        """
        Read a log file and itemize it.

        Args:
            file_path: Path to the log file
            encoding: File encoding

        Returns:
            Bill for the log

        Raises:
            ValueError: If the path is missing or blank
            LogReadError: If the file cannot be read
        """
        if file_path is None or not str(file_path).strip():
            raise ValueError("File path must not be null or empty")

        logger.debug(f"Calculating bill for {file_path}")
        return self.calculator.bill_log(read_log_file(file_path, encoding=encoding))

    def calculate_total_cost(self, file_path: Optional[PathLike], encoding: str = "utf-8") -> Decimal:
        """Total amount due for a log file, rounded to cents."""
        return self.load_bill(file_path, encoding=encoding).total
