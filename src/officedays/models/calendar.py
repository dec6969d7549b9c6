"""Weekday definitions and month calendar helpers."""
import calendar
from datetime import date
from enum import IntEnum
from typing import Iterable, List


class Weekday(IntEnum):
    """Day of week, numbered like ``date.weekday()``."""
    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @property
    def label(self) -> str:
        """Display name (Monday, Tuesday, ...)."""
        return self.name.capitalize()

    @property
    def short(self) -> str:
        return self.label[:3]

    @property
    def is_workday(self) -> bool:
        """True for Monday to Friday."""
        return self < Weekday.SATURDAY

    @classmethod
    def of(cls, day: date) -> "Weekday":
        return cls(day.weekday())

    @classmethod
    def from_string(cls, s: str) -> "Weekday":
        """Parse a weekday from its name or abbreviation."""
        key = str(s).strip().lower()
        if key in DAY_ALIASES:
            return DAY_ALIASES[key]
        raise ValueError(f"Invalid weekday value: {s}")


DAY_ALIASES = {}
for _day in Weekday:
    DAY_ALIASES[_day.name.lower()] = _day
    DAY_ALIASES[_day.name.lower()[:3]] = _day
DAY_ALIASES.update({"tues": Weekday.TUESDAY, "thur": Weekday.THURSDAY, "thurs": Weekday.THURSDAY})

WEEKDAYS = [d for d in Weekday if d.is_workday]
WEEKEND = [Weekday.SATURDAY, Weekday.SUNDAY]


def validate_period(month: int, year: int) -> None:
    """Raise ValueError if (month, year) is not a Gregorian calendar month."""
    if isinstance(month, bool) or not isinstance(month, int) or not 1 <= month <= 12:
        raise ValueError(f"month must be an integer in 1..12, got {month!r}")
    if isinstance(year, bool) or not isinstance(year, int) or not 1 <= year <= 9999:
        raise ValueError(f"year must be an integer in 1..9999, got {year!r}")


def days_in_month(month: int, year: int) -> int:
    """Number of days in the month (leap years included)."""
    return calendar.monthrange(year, month)[1]


def month_days(month: int, year: int) -> List[date]:
    """All dates of the month in order."""
    return [date(year, month, d) for d in range(1, days_in_month(month, year) + 1)]


def eligible_days(month: int, year: int, working_days_only: bool = True) -> List[date]:
    """Dates available for non-fixed assignment."""
    days = month_days(month, year)
    if working_days_only:
        days = [d for d in days if Weekday.of(d).is_workday]
    return days


def expand_weekdays(weekdays: Iterable[Weekday], month: int, year: int) -> List[date]:
    """Every date of the month that falls on one of ``weekdays``."""
    wanted = set(weekdays)
    return [d for d in month_days(month, year) if Weekday.of(d) in wanted]


def in_month(day: date, month: int, year: int) -> bool:
    return day.year == year and day.month == month


def month_name(month: int) -> str:
    """English month name, with a fallback for out-of-range values."""
    if 1 <= month <= 12:
        return calendar.month_name[month]
    return f"Month_{month}"
