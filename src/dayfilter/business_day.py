"""
Previous business day resolution.

Walks backward from yesterday until it finds a day that is neither a weekend
nor listed by the holiday calendar. If a holiday lookup fails the day is
judged on the weekend check alone; the run is then marked degraded and a
warning is logged, since a real holiday may have been accepted.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, tzinfo
from typing import Callable, Dict, List, Optional, Set, Union

import pytz

from .config import Settings, get_settings, get_timezone
from .dates import current_time, is_weekend, midnight_of, to_local_date
from .errors import ConfigurationError, FetchError, LookbackExhaustedError
from .holidays import HolidayCalendar
from .logging_config import get_logger

logger = get_logger(__name__)


def _utc_now() -> datetime:
    return datetime.now(pytz.utc)


@dataclass
class Resolution:
    """Outcome of one resolution run."""
    day: datetime
    skipped: List[date] = field(default_factory=list)
    degraded: bool = False
    lookups: int = 0


class BusinessDayResolver:
    """
    Finds the most recent business day strictly before today.

    Holiday lists are cached per month for the duration of a single
    resolve() call only; every call starts with an empty cache.
    """

    def __init__(
        self,
        calendar: Optional[HolidayCalendar] = None,
        tz: Optional[Union[str, tzinfo]] = None,
        clock: Optional[Callable[[], datetime]] = None,
        max_lookback_days: Optional[int] = None,
        settings: Optional[Settings] = None
    ):
        """
        Args:
            calendar: Holiday calendar. Defaults to one built from settings.
            tz: Zone name or tzinfo all day arithmetic is anchored to.
            clock: Callable returning "now". Defaults to the wall clock.
            max_lookback_days: Maximum number of days to walk back.
            settings: Settings to read defaults from. Defaults to get_settings().
        """
        if tz is None or calendar is None or max_lookback_days is None:
            settings = settings or get_settings()
        self.tz = get_timezone(tz) if tz is not None else settings.tz
        self.calendar = calendar or HolidayCalendar(settings=settings)
        self.clock = clock or _utc_now
        if max_lookback_days is None:
            max_lookback_days = settings.max_lookback_days
        if max_lookback_days < 1:
            raise ConfigurationError(
                f"max_lookback_days must be at least 1, got {max_lookback_days}"
            )
        self.max_lookback_days = max_lookback_days

    def resolve(self) -> datetime:
        """Local midnight of the previous business day."""
        return self.resolve_details().day

    def resolve_details(self) -> Resolution:
        """
        Resolve the previous business day and report how it was found.

        Raises:
            LookbackExhaustedError: Every day within max_lookback_days was a
                                    weekend or holiday
        """
        today = current_time(self.tz, self.clock()).date()
        cache: Dict[int, Optional[Set[str]]] = {}
        skipped: List[date] = []

        for offset in range(1, self.max_lookback_days + 1):
            candidate = today - timedelta(days=offset)
            if self._is_holiday(candidate, cache):
                skipped.append(candidate)
                continue

            resolution = Resolution(
                day=midnight_of(candidate, self.tz),
                skipped=skipped,
                degraded=any(dates is None for dates in cache.values()),
                lookups=len(cache),
            )
            logger.info(
                "Resolved previous business day",
                extra={
                    'day': candidate.isoformat(),
                    'skipped': len(skipped),
                    'degraded': resolution.degraded,
                }
            )
            return resolution

        logger.error(
            "No business day found",
            extra={'today': today.isoformat(), 'max_lookback_days': self.max_lookback_days}
        )
        raise LookbackExhaustedError(self.max_lookback_days)

    def is_holiday(self, day: Union[date, datetime]) -> bool:
        """
        Check whether a day is a weekend or a public holiday.

        A failed holiday lookup counts as "no holidays", so only the weekend
        check applies in that case.

        A datetime is judged on the calendar day it falls on in this
        resolver's zone.
        """
        return self._is_holiday(to_local_date(day, self.tz), {})

    def _is_holiday(self, day: date, cache: Dict[int, Optional[Set[str]]]) -> bool:
        if is_weekend(day):
            return True

        if day.month not in cache:
            cache[day.month] = self._lookup_month(day.month)

        holidays = cache[day.month]
        return holidays is not None and day.isoformat() in holidays

    def _lookup_month(self, month: int) -> Optional[Set[str]]:
        """Holiday dates for a month, or None if the lookup failed."""
        try:
            return self.calendar.holiday_dates(month)
        except FetchError as e:
            logger.warning(
                "Holiday lookup failed, using weekend check only: %s", e,
                extra={'month': month, 'error_type': type(e).__name__}
            )
            return None


def previous_business_day(
    now: Optional[datetime] = None,
    tz: Optional[Union[str, tzinfo]] = None,
    calendar: Optional[HolidayCalendar] = None
) -> datetime:
    """
    Local midnight of the last business day before `now` (default: the wall clock).

    Convenience wrapper around BusinessDayResolver.resolve().
    """
    clock = (lambda: now) if now is not None else None
    return BusinessDayResolver(calendar=calendar, tz=tz, clock=clock).resolve()
