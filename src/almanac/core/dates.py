"""Pure calendar date arithmetic - no I/O dependencies."""

import calendar
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from dateutil.relativedelta import relativedelta

SUNDAY = calendar.SUNDAY


@dataclass(frozen=True)
class DateWindow:
    """An inclusive range of calendar days."""

    start: date
    end: date

    def contains(self, d: date | datetime) -> bool:
        """Check if a date falls within this window (both ends inclusive)."""
        return in_range(d, self.start, self.end)

    def days(self) -> int:
        return (self.end - self.start).days + 1


def _as_date(d: date | datetime) -> date:
    # datetime is a subclass of date, so check it first
    if isinstance(d, datetime):
        return d.date()
    return d


def in_range(d: date | datetime, start: date | datetime, end: date | datetime) -> bool:
    """Check if a date lies in [start, end], inclusive on both ends."""
    return _as_date(start) <= _as_date(d) <= _as_date(end)


def week_window(d: date, first_weekday: int = SUNDAY) -> DateWindow:
    """
    The 7-day window containing a date.

    Args:
        d: Any day inside the week
        first_weekday: Day the week starts on (0=Monday ... 6=Sunday)
    """
    offset = (d.weekday() - first_weekday) % 7
    start = d - timedelta(days=offset)
    return DateWindow(start=start, end=start + timedelta(days=6))



def month_window(d: date) -> DateWindow:
    """First through last calendar day of the date's month."""
    return DateWindow(start=d + relativedelta(day=1), end=d + relativedelta(day=31))


def last_day_of_month(year: int, month: int) -> int:
    return (date(year, month, 1) + relativedelta(day=31)).day


def is_last_day_of_month(d: date) -> bool:
    return d + relativedelta(day=31) == d


def add_months(d: date, months: int, snap_to_end: bool = False) -> date:
    """
    Move a date by whole months.

    The day-of-month is kept when the target month has it and clamped to the
    target month's last day otherwise (Jan 31 + 1 month = Feb 28). With
    snap_to_end the result is always the target month's last day.
    """
    if snap_to_end:
        return d + relativedelta(months=months, day=31)
    return d + relativedelta(months=months)


def add_years(d: date, years: int, snap_to_end: bool = False) -> date:
    """Move a date by whole years, clamping Feb 29 in non-leap years."""
    if snap_to_end:
        return d + relativedelta(years=years, day=31)
    return d + relativedelta(years=years)
