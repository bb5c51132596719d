"""
Clock and time zone helpers.

All arithmetic is done on calendar dates and then re-localised, so a shifted
day always lands on local midnight even in zones with DST transitions.
"""

from datetime import date, datetime, timedelta, tzinfo
from typing import Optional, Union

import pytz


def localize(naive: datetime, tz: tzinfo) -> datetime:
    """Attach `tz` to a naive wall-clock datetime."""
    if hasattr(tz, "localize"):
        return tz.localize(naive)
    return naive.replace(tzinfo=tz)


def current_time(tz: tzinfo, now: Optional[datetime] = None) -> datetime:
    """
    Return the current instant expressed in `tz`.

    Args:
        tz: Target time zone
        now: Instant to use instead of the wall clock. Naive values are
             read as wall-clock time in `tz`.
    """
    if now is None:
        return datetime.now(pytz.utc).astimezone(tz)
    if now.tzinfo is None:
        return localize(now, tz)
    return now.astimezone(tz)


def midnight_of(day: date, tz: tzinfo) -> datetime:
    """Local midnight (00:00:00.000) of a calendar day in `tz`."""
    return localize(datetime(day.year, day.month, day.day), tz)


def local_midnight(moment: datetime, tz: tzinfo) -> datetime:
    """Local midnight of the calendar day `moment` falls on in `tz`."""
    return midnight_of(current_time(tz, moment).date(), tz)


def shift_days(moment: datetime, days: int, tz: tzinfo) -> datetime:
    """Local midnight `days` calendar days after the day of `moment` (negative = back)."""
    day = current_time(tz, moment).date() + timedelta(days=days)
    return midnight_of(day, tz)


def is_weekend(day: date) -> bool:
    # Monday=0 ... Sunday=6
    return day.weekday() >= 5


def to_local_date(day: Union[date, datetime], tz: Optional[tzinfo] = None) -> date:
    """
    Calendar date of `day`.

    A datetime is first converted into `tz` (when given) so an instant maps
    to the day it falls on in that zone.
    """
    if isinstance(day, datetime):
        if tz is not None:
            return current_time(tz, day).date()
        return day.date()
    return day
