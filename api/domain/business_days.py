# SPDX-License-Identifier: Apache-2.0

"""
Business-day calendar arithmetic for Colombian statutory terms.

Dates are handled as timezone-aware UTC datetimes whose time of day is a fixed
anchor. The default anchor is 17:00 UTC, which is noon in Colombia (UTC-5),
so that adding days or months never shifts the civil day. All functions in
this module are pure.
"""

import calendar
import re
from datetime import datetime, timedelta, timezone
from typing import Optional

from domain.holidays import is_holiday

# Colombia has no daylight saving time.
COLOMBIA_TZ = timezone(timedelta(hours=-5), "COT")

NOON_ANCHOR_HOUR = 17
MIDNIGHT_ANCHOR_HOUR = 0

MIN_SUPPORTED_YEAR = 2000

_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

SATURDAY = 5


def parse_date(text: str, anchor_hour: int = NOON_ANCHOR_HOUR) -> datetime:
    """
    Parse a YYYY-MM-DD string into an anchored UTC datetime.

    Args:
        text: Date in YYYY-MM-DD form
        anchor_hour: UTC hour used as time of day

    Returns:
        Anchored datetime

    Raises:
        ValueError: If the text does not describe a real calendar day
    """
    year, month, day = (int(part) for part in text.split("-"))
    return datetime(year, month, day, anchor_hour, tzinfo=timezone.utc)


def format_date(fecha: datetime) -> str:
    """Format an anchored datetime as its YYYY-MM-DD calendar day."""
    return fecha.astimezone(timezone.utc).strftime("%Y-%m-%d")


def is_valid_date_text(text) -> bool:
    """
    Validate a wire date: strict YYYY-MM-DD, year >= 2000, real calendar day.

    Anything that is not a string is invalid.
    """
    if not isinstance(text, str) or not _DATE_PATTERN.fullmatch(text):
        return False

    year, month, day = (int(part) for part in text.split("-"))
    if year < MIN_SUPPORTED_YEAR or not 1 <= month <= 12:
        return False

    return 1 <= day <= calendar.monthrange(year, month)[1]


def today_in_colombia(now: Optional[datetime] = None) -> str:
    """
    Return the current civil day in Colombia as YYYY-MM-DD.

    Args:
        now: Aware datetime to use instead of the system clock
    """
    now = now or datetime.now(timezone.utc)
    return now.astimezone(COLOMBIA_TZ).strftime("%Y-%m-%d")


def is_weekend(fecha: datetime) -> bool:
    return fecha.astimezone(timezone.utc).weekday() >= SATURDAY


def is_business_day(fecha: datetime) -> bool:
    """A business day is neither Saturday, Sunday nor a listed holiday."""
    return not is_weekend(fecha) and not is_holiday(fecha.astimezone(timezone.utc))


def add_calendar_days(fecha: datetime, days: int) -> datetime:
    return fecha + timedelta(days=days)


def add_calendar_months(fecha: datetime, months: int) -> datetime:
    """
    Shift a date by whole months, keeping its time anchor.

    When the target month is shorter than the original day of month, the
    result is clamped to the last day of the target month (Jan 31 + 1 month
    is Feb 28, or Feb 29 in leap years).
    """
    month_index = fecha.year * 12 + (fecha.month - 1) + months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(fecha.day, calendar.monthrange(year, month)[1])
    return fecha.replace(year=year, month=month, day=day)


def add_business_days(fecha: datetime, days: int, count_start_day: bool = True) -> datetime:
    """
    Advance until `days` business days have been counted.

    The start day counts as day 1 only when `count_start_day` is set and the
    start is itself a business day.

    Args:
        fecha: Start date
        days: Number of business days, at least 1
        count_start_day: Whether a business start day counts as day 1

    Returns:
        Date of the last counted business day

    Raises:
        ValueError: If days is lower than 1
    """
    if days < 1:
        raise ValueError(f"Business day count must be at least 1, got {days}")

    resultado = fecha
    counted = 1 if count_start_day and is_business_day(resultado) else 0

    while counted < days:
        resultado = add_calendar_days(resultado, 1)
        if is_business_day(resultado):
            counted += 1

    return resultado


def next_business_day(fecha: datetime) -> datetime:
    """
    Return the first business day strictly after `fecha`.

    The input is always skipped, even when it is already a business day.
    """
    resultado = add_calendar_days(fecha, 1)
    while not is_business_day(resultado):
        resultado = add_calendar_days(resultado, 1)
    return resultado
