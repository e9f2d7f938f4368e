"""Bill calculation: exemption rule and per-minute tariff."""

from collections import Counter
from dataclasses import dataclass, field
from datetime import timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional, Sequence

from shared.logger import get_logger

from .config import DEFAULT_CONFIG, BillingConfig
from .parser import CallRecord, LogParser, RejectedLine

logger = get_logger(__name__)

CENTS = Decimal("0.01")
ONE_MINUTE = timedelta(minutes=1)


@dataclass
class BilledCall:
    """A call with its computed cost."""

    record: CallRecord
    cost: Decimal
    exempt: bool = False


@dataclass
class Bill:
    """Itemized result of a calculation."""

    exempt_number: str = ""
    items: List[BilledCall] = field(default_factory=list)
    rejected: List[RejectedLine] = field(default_factory=list)
    total: Decimal = Decimal("0.00")

    @property
    def billed_calls(self) -> List[BilledCall]:
        return [item for item in self.items if not item.exempt]


class BillCalculator:
    """
    Compute the amount due for a call log.

    Calls to the most frequently dialed number are free. Every other call is
    billed minute by minute: the first free minutes at the peak or off-peak
    rate depending on the clock time, the rest at the additional-minute rate.
    """

    def __init__(self, config: BillingConfig = DEFAULT_CONFIG, parser: Optional[LogParser] = None):
        """
        Initialize bill calculator.

        Args:
            config: Tariff settings
            parser: Log parser (built from ``config`` when omitted)
        """
        self.config = config
        self.parser = parser or LogParser(config=config)

    def calculate_log(self, raw_log: Optional[str]) -> Decimal:
        """Parse a raw log and return the total rounded to cents."""
        return self.bill_log(raw_log).total

    def calculate(self, records: Sequence[CallRecord]) -> Decimal:
        """Return the total for already parsed records, rounded to cents."""
        return self.bill(records).total

    def bill_log(self, raw_log: Optional[str]) -> Bill:
        if not raw_log or not raw_log.strip():
            return Bill()

        result = self.parser.parse_log(raw_log)
        bill = self.bill(result.records)
        bill.rejected = result.rejected
        return bill

    def bill(self, records: Sequence[CallRecord]) -> Bill:
        """
        Itemize the records and compute the total.

        Args:
            records: Valid call records

        Returns:
            Bill with per-call costs and the rounded total
        """
        exempt_number = self.find_exempt_number(records)

        items = []
        for record in records:
            if record.phone_number == exempt_number:
                items.append(BilledCall(record=record, cost=Decimal("0"), exempt=True))
            else:
                items.append(BilledCall(record=record, cost=self.call_cost(record)))

        subtotal = sum((item.cost for item in items), Decimal("0"))
        total = subtotal.quantize(CENTS, rounding=ROUND_HALF_UP)

        logger.debug(f"Billed {len(items)} calls, exempt number: {exempt_number or '-'}, total: {total}")
        return Bill(exempt_number=exempt_number, items=items, total=total)

    @staticmethod
    def build_frequency_table(records: Sequence[CallRecord]) -> Counter:
        """Count calls per phone number."""
        return Counter(record.phone_number for record in records)

    def find_exempt_number(self, records: Sequence[CallRecord]) -> str:
        """
        Find the most frequently dialed number.

        Ties go to the smallest number. An empty sequence gives ``""``.
        """
        frequency = self.build_frequency_table(records)
        if not frequency:
            return ""

        # Highest count first, then smallest number
        number, _ = min(frequency.items(), key=lambda item: (-item[1], item[0]))
        return number

    def call_cost(self, record: CallRecord) -> Decimal:
        """
        Cost of a single call, not rounded.

        Every started minute is priced by the clock time at which it starts.
        """
        cost = Decimal("0")
        cursor = record.start_time
        minutes_counted = 0

        while cursor < record.end_time:
            minutes_counted += 1
            if minutes_counted > self.config.free_minutes:
                cost += self.config.additional_minute_rate
            elif self.config.is_peak(cursor.time()):
                cost += self.config.peak_rate
            else:
                cost += self.config.off_peak_rate
            cursor += ONE_MINUTE

        return cost
