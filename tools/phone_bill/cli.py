"""CLI interface for the telephone bill calculator."""

import json
import sys
from pathlib import Path

import click

from shared.cli import create_table, error, handle_errors, info, print_table, success, warning
from shared.logger import setup_logger

from .calculator import Bill
from .service import LogReadError, TelephoneBillService

DEFAULT_LOG_FILE = "calls.csv"
TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def display_calls(bill: Bill) -> None:
    """Display every call with its cost."""
    if not bill.items:
        info("No valid calls found")
        return

    table = create_table(title=f"Calls ({len(bill.billed_calls)} billed of {len(bill.items)})")
    table.add_column("Number", style="cyan", no_wrap=True)
    table.add_column("Start", style="dim")
    table.add_column("End", style="dim")
    table.add_column("Minutes", justify="right")
    table.add_column("Cost", justify="right", style="bold")

    for item in bill.items:
        record = item.record
        cost = "[green]exempt[/green]" if item.exempt else f"{item.cost:.2f}"
        table.add_row(
            record.phone_number,
            record.start_time.strftime(TIME_FORMAT),
            record.end_time.strftime(TIME_FORMAT),
            str(record.minutes_started),
            cost,
        )

    print_table(table)


def bill_to_dict(bill: Bill, currency: str) -> dict:
    return {
        "total": f"{bill.total:.2f}",
        "currency": currency,
        "exempt_number": bill.exempt_number or None,
        "rejected_lines": len(bill.rejected),
        "calls": [
            {
                "phone_number": item.record.phone_number,
                "start": item.record.start_time.isoformat(),
                "end": item.record.end_time.isoformat(),
                "minutes": item.record.minutes_started,
                "cost": f"{item.cost:.2f}",
                "exempt": item.exempt,
            }
            for item in bill.items
        ],
    }


@click.command()
@click.argument("log_file", type=click.Path(dir_okay=False, path_type=Path), default=DEFAULT_LOG_FILE)
@click.option(
    "--currency",
    "-c",
    default="Kč",
    show_default=True,
    help="Currency label printed after the amount",
)
@click.option(
    "--encoding",
    default="utf-8",
    show_default=True,
    help="Log file encoding",
)
@click.option(
    "--details",
    "-d",
    is_flag=True,
    help="Show every call with its cost",
)
@click.option(
    "--output",
    "-o",
    type=click.Choice(["table", "json"], case_sensitive=False),
    default="table",
    help="Output format",
)
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@handle_errors
def main(
    log_file: Path,
    currency: str,
    encoding: str,
    details: bool,
    output: str,
    verbose: bool,
):
    """
    Phone Bill - Calculate the amount due for a telephone call log.

    Each line of the log holds a 12-digit phone number, the call start and
    the call end (dd-MM-yyyy HH:mm:ss). Calls to the most frequently dialed
    number are free.

    Examples:

        \b
        # Bill calls.csv in the current directory
        phone-bill

        \b
        # Show every call
        phone-bill march.csv --details

        \b
        # JSON output
        phone-bill march.csv --output json > bill.json
    """
    # Setup logging
    log_level = "DEBUG" if verbose else "INFO"
    setup_logger(__package__, level=log_level)

    service = TelephoneBillService()

    try:
        bill = service.load_bill(log_file, encoding=encoding)
    except (ValueError, LogReadError) as e:
        error(str(e))
        sys.exit(1)

    if output == "json":
        print(json.dumps(bill_to_dict(bill, currency), indent=2, ensure_ascii=False))
        sys.exit(0)

    success(f"Parsed {len(bill.items)} call(s), {len(bill.billed_calls)} billed")

    if bill.rejected:
        warning(f"Skipped {len(bill.rejected)} invalid line(s)")

    if details:
        display_calls(bill)
        if bill.exempt_number:
            info(f"Calls to {bill.exempt_number} are free")

    click.echo(f"Total amount to be paid: {bill.total} {currency}")


if __name__ == "__main__":
    main()
