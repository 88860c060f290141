"""Conversion of broken-down calendar time to seconds since the epoch."""

from __future__ import annotations

from dataclasses import dataclass

SECS_PER_DAY = 86400
DAYS_PER_COMMON_YEAR = 365
DAYS_PER_LEAP_YEAR = 366
POSIX_BASE_YEAR = 1970
FEBRUARY = 2

# Days from the epoch to 2000-01-01 (seven leap years in between).
DAYS_TO_2000 = 365 * 30 + 7
DAYS_4_YEARS = 365 * 4 + 1
DAYS_100_YEARS = 365 * 100 + 24
DAYS_400_YEARS = 365 * 400 + 97

_U64 = 2**64

_MONTH_DAYS = {1: 31, 2: 28, 3: 31, 4: 30, 5: 31, 6: 30,
               7: 31, 8: 31, 9: 30, 10: 31, 11: 30, 12: 31}


@dataclass
class DateTimeFields:
    """A UTC date and time split into calendar fields; months start at 1."""

    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0
    second: int = 0


def bcd_to_bin(bcd: int) -> int:
    """Decode a two-digit binary-coded decimal byte."""
    return ((bcd >> 4) & 0x0F) * 10 + (bcd & 0x0F)


def is_leap_year(year: int) -> bool:
    """Return True for Gregorian leap years."""
    if year & 3:
        return False
    if year % 100:
        return True
    return year % 400 == 0


def days_in_month(month: int) -> int:
    """Return the days in ``month`` of a common year, or -1 if out of range."""
    return _MONTH_DAYS.get(month, -1)


def _days_in_years(start: int, stop: int) -> int:
    """Total days in the whole years from ``start`` up to but excluding ``stop``."""
    return sum(
        DAYS_PER_LEAP_YEAR if is_leap_year(y) else DAYS_PER_COMMON_YEAR
        for y in range(start, stop)
    )


def ymdhms_to_secs(fields: DateTimeFields) -> int:
    """Return seconds since 1970-01-01 00:00:00 UTC; 0 for years before 1970."""
    year = fields.year
    if year < POSIX_BASE_YEAR:
        return 0

    days = 1 if is_leap_year(year) and fields.month > FEBRUARY else 0

    if year < 2000:
        days += _days_in_years(POSIX_BASE_YEAR, year)
    else:
        rest = year - 2000
        days += DAYS_TO_2000
        cycles, rest = divmod(rest, 400)
        days += cycles * DAYS_400_YEARS
        centuries, rest = divmod(rest, 100)
        days += centuries * DAYS_100_YEARS
        quads, rest = divmod(rest, 4)
        days += quads * DAYS_4_YEARS
        days += _days_in_years(year - rest, year)

    days += sum(days_in_month(m) for m in range(1, fields.month))
    days += fields.day - 1

    secs = ((days * 24 + fields.hour) * 60 + fields.minute) * 60 + fields.second
    return secs % _U64