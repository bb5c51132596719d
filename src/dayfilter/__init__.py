"""
dayfilter - calendar day filters for MongoDB ObjectId ranges.

Installation:
    pip install dayfilter

Build filters:
    from dayfilter import today_filter, yesterday_filter, yesterday_not_holiday_filter

    collection.find({"_id": today_filter()})
    collection.find({"_id": yesterday_not_holiday_filter()})

Resolve the previous business day:
    from dayfilter import previous_business_day

    day = previous_business_day()   # local midnight, Asia/Jakarta by default

Fetch typed JSON:
    from dayfilter import fetch_json

    status, data = fetch_json("https://example.com/api", dict)
"""

from .business_day import BusinessDayResolver, Resolution, previous_business_day
from .config import Settings, clear_settings_cache, get_settings, load_settings
from .errors import (
    ConfigurationError,
    DayFilterError,
    DecodeError,
    FetchError,
    LookbackExhaustedError,
    TransportError,
)
from .fetch import TypedFetcher, fetch_json
from .filters import (
    day_filter,
    object_id_for,
    today_filter,
    yesterday_filter,
    yesterday_not_holiday_filter,
)
from .holidays import HolidayCalendar, HolidayRecord

__version__ = "0.1.0"
__all__ = [
    "BusinessDayResolver",
    "Resolution",
    "previous_business_day",
    "Settings",
    "clear_settings_cache",
    "get_settings",
    "load_settings",
    "ConfigurationError",
    "DayFilterError",
    "DecodeError",
    "FetchError",
    "LookbackExhaustedError",
    "TransportError",
    "TypedFetcher",
    "fetch_json",
    "day_filter",
    "object_id_for",
    "today_filter",
    "yesterday_filter",
    "yesterday_not_holiday_filter",
    "HolidayCalendar",
    "HolidayRecord",
]
