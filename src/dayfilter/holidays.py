"""
Public holiday calendar client.

The remote API serves one month of national holidays per call:

    GET https://dayoffapi.vercel.app/api?month=10

    [{"Tanggal": "2026-12-25", "Keterangan": "Hari Raya Natal", "is_cuti": false}, ...]

Only the `Tanggal` field matters for matching; entries are compared on the
full YYYY-MM-DD string, so a list for the wrong year never matches.
"""

from datetime import date, datetime
from typing import Dict, List, Optional, Set, Union

from pydantic import BaseModel, ConfigDict, Field

from .config import Settings, get_settings
from .dates import to_local_date
from .fetch import TypedFetcher
from .logging_config import get_logger

logger = get_logger(__name__)


class HolidayRecord(BaseModel):
    """A single holiday entry from the calendar API."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    date: str = Field(..., alias="Tanggal", description="Holiday date as YYYY-MM-DD")
    description: Optional[str] = Field(None, alias="Keterangan")
    is_cuti: Optional[bool] = Field(None, description="Collective leave day rather than a national holiday")


class HolidayCalendar:
    """
    Looks up public holidays month by month.

    Lookups are not cached here; BusinessDayResolver keeps a per-run cache.
    Errors from the fetcher (TransportError, DecodeError) propagate.
    """

    API_NAME = "HolidayAPI"

    def __init__(
        self,
        api_url: Optional[str] = None,
        fetcher: Optional[TypedFetcher] = None,
        settings: Optional[Settings] = None
    ):
        """
        Args:
            api_url: Base URL of the holiday API. Defaults to settings.
            fetcher: TypedFetcher to issue requests with. Defaults to a new
                     one using the settings' HTTP timeout.
            settings: Settings to read defaults from. Only consulted when
                      api_url or fetcher is missing; defaults to get_settings().
        """
        if api_url is None or fetcher is None:
            settings = settings or get_settings()
            api_url = api_url or settings.holiday_api_url
            fetcher = fetcher or TypedFetcher(
                timeout=settings.http_timeout, api_name=self.API_NAME
            )
        self.api_url = api_url.rstrip("/")
        self.fetcher = fetcher

    def params_for_month(self, month: int) -> Dict[str, int]:
        if not 1 <= month <= 12:
            raise ValueError(f"month must be between 1 and 12, got {month}")
        return {"month": month}

    def fetch_month(self, month: int) -> List[HolidayRecord]:
        """
        Fetch the holiday list for a month.

        Raises:
            TransportError: The API could not be reached
            DecodeError: The body is not a list of holiday records
        """
        params = self.params_for_month(month)
        status_code, records = self.fetcher.get(self.api_url, List[HolidayRecord], params=params)
        logger.debug(
            "Fetched holidays",
            extra={'month': month, 'status_code': status_code, 'count': len(records)}
        )
        return records

    def holiday_dates(self, month: int) -> Set[str]:
        """Holiday dates (YYYY-MM-DD) for a month."""
        return {record.date for record in self.fetch_month(month)}

    def is_public_holiday(self, day: Union[date, datetime]) -> bool:
        """
        Check a single day against its month's holiday list.

        A datetime is checked on the calendar date it carries.
        """
        day = to_local_date(day)
        return day.isoformat() in self.holiday_dates(day.month)
