"""Call log parsing and line validation."""

import logging
import math
import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import List, Optional

from shared.logger import get_logger

from .config import DEFAULT_CONFIG, BillingConfig

logger = get_logger(__name__)

# Leading characters outside printable ASCII (BOM, control characters, ...)
LEADING_NON_PRINTABLE = re.compile(r"^[^\x20-\x7e]+")

# Whitespace and control characters at either end of a line or field
SURROUNDING_BLANKS = re.compile(r"^[\s\x00-\x20]+|[\s\x00-\x20]+$")

FIELD_COUNT = 3


class InvalidLineError(ValueError):
    """A log line that cannot be turned into a call record."""


class NonPositiveDurationError(InvalidLineError):
    """A call whose end time is not after its start time."""


@dataclass(frozen=True)
class CallRecord:
    """A single call from the log."""

    phone_number: str
    start_time: datetime
    end_time: datetime

    @property
    def duration(self) -> timedelta:
        return self.end_time - self.start_time

    @property
    def minutes_started(self) -> int:
        """Billable minutes, counting a trailing partial minute as a whole one."""
        return max(0, math.ceil(self.duration.total_seconds() / 60))


@dataclass
class RejectedLine:
    """A log line that was skipped."""

    line_number: int
    line: str
    reason: str


@dataclass
class ParseResult:
    """Records kept from a log together with the lines that were skipped."""

    records: List[CallRecord] = field(default_factory=list)
    rejected: List[RejectedLine] = field(default_factory=list)


class LogParser:
    """
    Parse telephone call logs.

    Each non-empty line holds ``phone_number,start,end``. Malformed lines are
    reported through the logger and skipped; the rest of the log is still
    processed.
    """

    def __init__(
        self,
        config: BillingConfig = DEFAULT_CONFIG,
        log: Optional[logging.Logger] = None,
    ):
        """
        Initialize call log parser.

        Args:
            config: Billing settings holding the timestamp format and number pattern
            log: Logger receiving rejection diagnostics (module logger by default)
        """
        self.config = config
        self.log = log or logger
        self._phone_number_re = re.compile(config.phone_number_pattern)

    def parse(self, raw_log: Optional[str]) -> List[CallRecord]:
        """Parse a raw log into call records, in input order."""
        return self.parse_log(raw_log).records

    def parse_log(self, raw_log: Optional[str]) -> ParseResult:
        """
        Parse a raw log and keep track of skipped lines.

        Args:
            raw_log: Whole log content, lines separated by ``\\n``

        Returns:
            ParseResult with valid records and rejected lines
        """
        result = ParseResult()

        if not raw_log or not raw_log.strip():
            return result

        for line_num, line in enumerate(raw_log.split("\n"), 1):
            line = self.clean_line(line)
            if not line:
                continue

            try:
                result.records.append(self.parse_line(line, line_num))
            except NonPositiveDurationError as e:
                self.log.debug(f"Skipping line {line_num}: {e}")
                result.rejected.append(RejectedLine(line_num, line, str(e)))
            except InvalidLineError as e:
                self.log.warning(f"Skipping line {line_num}: {e}")
                result.rejected.append(RejectedLine(line_num, line, str(e)))

        self.log.debug(
            f"Parsed {len(result.records)} call records, rejected {len(result.rejected)} lines"
        )
        return result

    @staticmethod
    def clean_line(line: str) -> str:
        """Trim whitespace, control characters and leading non-printable characters."""
        return LEADING_NON_PRINTABLE.sub("", SURROUNDING_BLANKS.sub("", line))

    def parse_line(self, line: str, line_number: int = 0) -> CallRecord:
        """
        Parse a single cleaned log line.

        Args:
            line: Log line
            line_number: Line number in the log

        Returns:
            CallRecord

        Raises:
            InvalidLineError: If the line is malformed
            NonPositiveDurationError: If the call does not end after it starts
        """
        fields = line.split(",")
        # Trailing empty fields do not count, "a,b,c," has three fields
        while fields and not fields[-1]:
            fields.pop()
        if len(fields) != FIELD_COUNT:
            raise InvalidLineError(f"invalid log format: {line}")

        phone_number, start_str, end_str = (SURROUNDING_BLANKS.sub("", f) for f in fields)

        if not self._phone_number_re.fullmatch(phone_number):
            raise InvalidLineError(f"invalid phone number format: {phone_number}")

        start_time = self._parse_timestamp(start_str)
        end_time = self._parse_timestamp(end_str)
        if start_time is None or end_time is None:
            raise InvalidLineError(f"invalid date format: {phone_number}")

        if end_time <= start_time:
            raise NonPositiveDurationError(f"call does not end after it starts: {line}")

        return CallRecord(phone_number=phone_number, start_time=start_time, end_time=end_time)

    def _parse_timestamp(self, value: str) -> Optional[datetime]:
        """Parse a timestamp, requiring the exact zero-padded form."""
        fmt = self.config.timestamp_format
        try:
            parsed = datetime.strptime(value, fmt)
        except ValueError:
            return None

        # strptime also accepts unpadded fields such as "7-7-2023"
        if parsed.strftime(fmt) != value:
            return None

        return parsed
