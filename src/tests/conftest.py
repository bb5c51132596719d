"""
Shared pytest fixtures for dayfilter tests.

Provides a clean environment per test, a fixed Jakarta clock and a holiday
calendar pointed at a stub URL for use with the `responses` library.
"""

from datetime import datetime

import pytest

from dayfilter.config import clear_settings_cache
from dayfilter.fetch import TypedFetcher
from dayfilter.holidays import HolidayCalendar

from tests.helpers import HOLIDAY_API_URL, JAKARTA


# =============================================================================
# Environment Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def reset_environment(monkeypatch):
    """Remove dayfilter settings from the environment and reset the cache."""
    for key in [
        'DAYFILTER_TIMEZONE',
        'DAYFILTER_HOLIDAY_API_URL',
        'DAYFILTER_MAX_LOOKBACK_DAYS',
        'DAYFILTER_HTTP_TIMEOUT',
        'AWS_LAMBDA_FUNCTION_NAME',
        'LOG_LEVEL',
    ]:
        monkeypatch.delenv(key, raising=False)

    clear_settings_cache()
    yield
    clear_settings_cache()


# =============================================================================
# Clock Fixtures
# =============================================================================

@pytest.fixture
def jakarta():
    return JAKARTA


@pytest.fixture
def monday_now():
    """Monday 2026-10-19 09:30 in Jakarta."""
    return JAKARTA.localize(datetime(2026, 10, 19, 9, 30))


@pytest.fixture
def monday_clock(monday_now):
    return lambda: monday_now


# =============================================================================
# Holiday API Fixtures
# =============================================================================

@pytest.fixture
def holiday_calendar():
    """Calendar pointed at the stub holiday API."""
    return HolidayCalendar(
        api_url=HOLIDAY_API_URL,
        fetcher=TypedFetcher(api_name='HolidayAPI')
    )
