"""Tariff and log format settings."""

from dataclasses import dataclass
from datetime import time
from decimal import Decimal


@dataclass(frozen=True)
class BillingConfig:
    """
    Immutable billing settings.

    Attributes:
        peak_rate: Price of a minute started inside the peak window
        off_peak_rate: Price of a minute started outside the peak window
        additional_minute_rate: Flat price of every minute after the free minutes
        free_minutes: Number of leading minutes billed at the time-of-day rate
        peak_start: First clock time of the peak window (inclusive)
        peak_end: End of the peak window (exclusive)
        timestamp_format: strptime format of the start and end fields
        phone_number_pattern: Regex the whole phone number field must match
    """

    peak_rate: Decimal = Decimal("1.00")
    off_peak_rate: Decimal = Decimal("0.50")
    additional_minute_rate: Decimal = Decimal("0.20")
    free_minutes: int = 5
    peak_start: time = time(8, 0)
    peak_end: time = time(16, 0)
    timestamp_format: str = "%d-%m-%Y %H:%M:%S"
    phone_number_pattern: str = r"\d{12}"

    def is_peak(self, moment: time) -> bool:
        """Check whether a clock time falls in [peak_start, peak_end)."""
        return self.peak_start <= moment < self.peak_end


DEFAULT_CONFIG = BillingConfig()
