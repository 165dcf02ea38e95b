from __future__ import annotations

import logging
import re
from datetime import date, datetime, timedelta
from typing import Optional
from zoneinfo import ZoneInfo

logger = logging.getLogger(__name__)

DEFAULT_TIMEZONE = "UTC"

# Fixed en-US names; strftime would follow the process locale.
_WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
_MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

_ISO_DATE_RE = re.compile(r"^([0-9]{4})-([0-9]{2})-([0-9]{2})$")


class InvalidDateError(ValueError):
    """Raised when caller-supplied date input is not a real ``YYYY-MM-DD`` day."""

    def __init__(self, value: str, reason: str) -> None:
        super().__init__(f"invalid date {value!r}: {reason}")
        self.value = value
        self.reason = reason


def parse_date_input(value: Optional[str], default: Optional[date] = None) -> date:
    """Validate a date picker value; blank input falls back to *default*."""
    text = (value or "").strip()
    if not text:
        if default is None:
            raise InvalidDateError(value or "", "date is required")
        return default

    match = _ISO_DATE_RE.match(text)
    if not match:
        raise InvalidDateError(text, "expected YYYY-MM-DD")
    year, month, day = (int(part) for part in match.groups())
    if year < 1:
        raise InvalidDateError(text, "year out of range")
    if not 1 <= month <= 12:
        raise InvalidDateError(text, "month out of range")
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise InvalidDateError(text, "day out of range") from None


def check_forecast_window(selected: date, days: int) -> date:
    """Last day of the window starting after *selected*; rejects windows past ``date.max``."""
    try:
        return selected + timedelta(days=days)
    except OverflowError:
        raise InvalidDateError(selected.isoformat(), "forecast out of range") from None


def resolve_timezone(value: Optional[str]) -> ZoneInfo:
    if not value:
        return ZoneInfo(DEFAULT_TIMEZONE)
    try:
        return ZoneInfo(value)
    except Exception:
        logger.warning("[dates] invalid tz=%s; defaulting to %s", value, DEFAULT_TIMEZONE)
        return ZoneInfo(DEFAULT_TIMEZONE)


def today_local(tz_name: Optional[str] = None) -> date:
    return datetime.now(resolve_timezone(tz_name)).date()


def format_long_date(day: date) -> str:
    """``Monday, July 22, 2025``"""
    return f"{_WEEKDAYS[day.weekday()]}, {_MONTHS[day.month - 1]} {day.day}, {day.year}"


def format_short_date(day: date) -> str:
    """``Mon, Jul 22``"""
    return f"{_WEEKDAYS[day.weekday()][:3]}, {_MONTHS[day.month - 1][:3]} {day.day}"
