"""
Tests for ObjectId day filters.
"""

from datetime import datetime
from unittest.mock import patch

import pytz
import responses
from bson import ObjectId
from requests.exceptions import ConnectionError
from responses import matchers

from dayfilter.business_day import BusinessDayResolver
from dayfilter.filters import (
    day_filter,
    object_id_for,
    today_filter,
    yesterday_filter,
    yesterday_not_holiday_filter,
)

from tests.helpers import HOLIDAY_API_URL, JAKARTA, holiday_payload


def oid(year, month, day, tz=JAKARTA):
    """ObjectId for local midnight of a calendar day."""
    return ObjectId.from_datetime(tz.localize(datetime(year, month, day)))


class TestObjectIdFor:
    """Test timestamp to ObjectId conversion."""

    def test_uses_utc_timestamp(self):
        moment = JAKARTA.localize(datetime(2026, 10, 19))
        object_id = object_id_for(moment)

        assert object_id.generation_time == pytz.utc.localize(datetime(2026, 10, 18, 17, 0))

    def test_orders_by_time(self):
        earlier = object_id_for(JAKARTA.localize(datetime(2026, 10, 19)))
        later = object_id_for(JAKARTA.localize(datetime(2026, 10, 20)))

        assert earlier < later


class TestTodayFilter:
    """Test the today filter."""

    def test_bounds(self, monday_now):
        result = today_filter(now=monday_now, tz=JAKARTA)

        assert result == {'$gte': oid(2026, 10, 19), '$lt': oid(2026, 10, 20)}
        assert result['$gte'] < result['$lt']

    def test_just_after_local_midnight(self):
        """01:30 in Jakarta is still the previous day in UTC."""
        utc_now = pytz.utc.localize(datetime(2026, 10, 18, 18, 30))

        result = today_filter(now=utc_now, tz='Asia/Jakarta')

        assert result['$gte'] == oid(2026, 10, 19)

    def test_just_before_local_midnight(self):
        late = JAKARTA.localize(datetime(2026, 10, 19, 23, 59, 59))

        result = today_filter(now=late, tz=JAKARTA)

        assert result['$gte'] == oid(2026, 10, 19)
        assert result['$lt'] == oid(2026, 10, 20)

    def test_zone_defaults_from_settings(self, monkeypatch):
        monkeypatch.setenv('DAYFILTER_TIMEZONE', 'UTC')
        now = pytz.utc.localize(datetime(2026, 10, 19, 3, 0))

        result = today_filter(now=now)

        assert result['$gte'] == oid(2026, 10, 19, tz=pytz.utc)

    def test_default_zone_is_jakarta(self):
        now = pytz.utc.localize(datetime(2026, 10, 19, 20, 0))

        result = today_filter(now=now)

        assert result['$gte'] == oid(2026, 10, 20)

    def test_wall_clock(self):
        result = today_filter()

        assert result['$lt'].generation_time > result['$gte'].generation_time


class TestYesterdayFilter:
    """Test the yesterday filter."""

    def test_is_today_shifted_back_one_day(self, monday_now):
        today = today_filter(now=monday_now, tz=JAKARTA)
        yesterday = yesterday_filter(now=monday_now, tz=JAKARTA)

        assert yesterday == {'$gte': oid(2026, 10, 18), '$lt': oid(2026, 10, 19)}
        assert yesterday['$lt'] == today['$gte']

    def test_month_boundary(self):
        first = JAKARTA.localize(datetime(2026, 11, 1, 10, 0))

        result = yesterday_filter(now=first, tz=JAKARTA)

        assert result == {'$gte': oid(2026, 10, 31), '$lt': oid(2026, 11, 1)}


class TestDayFilter:
    """Test the generic day filter."""

    def test_dst_day_spans_local_midnights(self):
        """The day clocks go back in New York is 25 hours long."""
        new_york = pytz.timezone('America/New_York')
        moment = new_york.localize(datetime(2026, 11, 1, 12, 0))

        result = day_filter(moment, new_york)

        assert result['$gte'] == oid(2026, 11, 1, tz=new_york)
        assert result['$lt'] == oid(2026, 11, 2, tz=new_york)
        span = result['$lt'].generation_time - result['$gte'].generation_time
        assert span.total_seconds() == 25 * 3600


class TestYesterdayNotHolidayFilter:
    """Test the business day filter."""

    @responses.activate
    def test_monday_spans_friday(self, holiday_calendar, monday_clock):
        responses.add(
            responses.GET, HOLIDAY_API_URL,
            json=holiday_payload(),
            match=[matchers.query_param_matcher({'month': '10'})]
        )
        resolver = BusinessDayResolver(calendar=holiday_calendar, tz=JAKARTA, clock=monday_clock)

        result = yesterday_not_holiday_filter(resolver=resolver)

        assert result == {'$gte': oid(2026, 10, 16), '$lt': oid(2026, 10, 17)}

    @responses.activate
    def test_friday_holiday_spans_thursday(self, holiday_calendar, monday_clock):
        responses.add(responses.GET, HOLIDAY_API_URL, json=holiday_payload('2026-10-16'))
        resolver = BusinessDayResolver(calendar=holiday_calendar, tz=JAKARTA, clock=monday_clock)

        result = yesterday_not_holiday_filter(resolver=resolver)

        assert result == {'$gte': oid(2026, 10, 15), '$lt': oid(2026, 10, 16)}

    @responses.activate
    def test_builds_resolver_from_settings(self, monkeypatch, monday_now):
        """Without a resolver the configured API URL and zone are used."""
        monkeypatch.setenv('DAYFILTER_HOLIDAY_API_URL', HOLIDAY_API_URL)
        responses.add(responses.GET, HOLIDAY_API_URL, body=ConnectionError('down'))

        with patch('requests.Session') as session_cls:
            result = yesterday_not_holiday_filter(now=monday_now)

        session_cls.assert_not_called()

        assert result == {'$gte': oid(2026, 10, 16), '$lt': oid(2026, 10, 17)}
        assert len(responses.calls) == 1
