"""Phone Bill - Calculate telephone bills from call logs."""

from .calculator import Bill, BillCalculator, BilledCall
from .config import DEFAULT_CONFIG, BillingConfig
from .parser import (
    CallRecord,
    InvalidLineError,
    LogParser,
    NonPositiveDurationError,
    ParseResult,
    RejectedLine,
)
from .service import LogReadError, TelephoneBillService

__all__ = [
    "Bill",
    "BillCalculator",
    "BilledCall",
    "BillingConfig",
    "CallRecord",
    "DEFAULT_CONFIG",
    "InvalidLineError",
    "LogParser",
    "LogReadError",
    "NonPositiveDurationError",
    "ParseResult",
    "RejectedLine",
    "TelephoneBillService",
]
