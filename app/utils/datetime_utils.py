"""
Datetime utilities.

Provides timezone-aware datetime functions.
"""

from datetime import UTC, datetime, timedelta

from app.config.business_constants import LEDGER_DATE_FORMAT


def utc_now() -> datetime:
    """
    Get current UTC datetime with timezone info.

    Returns:
        Current datetime in UTC with timezone awareness
    """
    return datetime.now(UTC)


def format_ledger_date(moment: datetime) -> str:
    """Format datetime the way ledger and pair history display it."""
    return moment.strftime(LEDGER_DATE_FORMAT)


def format_countdown(remaining: timedelta) -> str:
    """
    Format remaining time as HH:MM:SS.

    Args:
        remaining: Time left (negative values render as zero)

    Returns:
        Countdown string
    """
    total = max(int(remaining.total_seconds()), 0)
    hours, rest = divmod(total, 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
