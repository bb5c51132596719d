"""
MongoDB `_id` range filters for calendar days.

An ObjectId starts with its creation timestamp, so a range over `_id` built
from two local midnights selects exactly the documents inserted on that day
in the configured zone:

    collection.find({"_id": today_filter()})
"""

from datetime import datetime, tzinfo
from typing import Dict, Optional, Union

from bson import ObjectId

from .business_day import BusinessDayResolver
from .config import get_settings, get_timezone
from .dates import current_time, local_midnight, shift_days
from .logging_config import get_logger

logger = get_logger(__name__)

DateFilter = Dict[str, ObjectId]


def _zone(tz: Optional[Union[str, tzinfo]]) -> tzinfo:
    return get_timezone(tz) if tz is not None else get_settings().tz


def object_id_for(moment: datetime) -> ObjectId:
    """ObjectId whose timestamp is `moment` and whose remaining bytes are zero."""
    return ObjectId.from_datetime(moment)


def day_filter(day: datetime, tz: Optional[Union[str, tzinfo]] = None) -> DateFilter:
    """
    Filter matching the whole calendar day `day` falls on.

    Returns:
        {"$gte": <ObjectId at local midnight>, "$lt": <ObjectId at next local midnight>}
    """
    zone = _zone(tz)
    start = local_midnight(day, zone)
    end = shift_days(start, 1, zone)
    return {
        "$gte": object_id_for(start),
        "$lt": object_id_for(end),
    }


def today_filter(
    now: Optional[datetime] = None,
    tz: Optional[Union[str, tzinfo]] = None
) -> DateFilter:
    """Filter for [midnight today, midnight tomorrow)."""
    zone = _zone(tz)
    return day_filter(current_time(zone, now), zone)


def yesterday_filter(
    now: Optional[datetime] = None,
    tz: Optional[Union[str, tzinfo]] = None
) -> DateFilter:
    """Filter for [midnight yesterday, midnight today)."""
    zone = _zone(tz)
    return day_filter(shift_days(current_time(zone, now), -1, zone), zone)


def yesterday_not_holiday_filter(
    now: Optional[datetime] = None,
    tz: Optional[Union[str, tzinfo]] = None,
    resolver: Optional[BusinessDayResolver] = None
) -> DateFilter:
    """
    Filter for the most recent business day before today.

    Args:
        now: Instant to resolve from. Ignored when `resolver` is given.
        tz: Zone name or tzinfo. Ignored when `resolver` is given.
        resolver: Preconfigured resolver (calendar, clock, zone)

    Raises:
        LookbackExhaustedError: No business day within the lookback limit
    """
    if resolver is None:
        clock = (lambda: now) if now is not None else None
        resolver = BusinessDayResolver(tz=_zone(tz), clock=clock)

    day = resolver.resolve()
    logger.debug("Built business day filter", extra={'day': day.date().isoformat()})
    return day_filter(day, resolver.tz)
