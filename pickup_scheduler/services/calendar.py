from __future__ import annotations

from datetime import date, datetime, timedelta
from functools import lru_cache
from zoneinfo import ZoneInfo

import holidays

from ..config import get_settings


class HolidayCalendar:
    """Bank holiday lookup for one country/subdivision.

    Holidays are resolved for the year of each date asked about, so a window
    that crosses into a new year uses that year's holidays.
    """

    def __init__(self, country: str = "GB", subdivision: str | None = "ENG"):
        self.country = country
        self.subdivision = subdivision
        self._holidays = holidays.country_holidays(country, subdiv=subdivision)

    def __call__(self, day: date) -> bool:
        return self.is_holiday(day)

    def is_holiday(self, day: date) -> bool:
        return day in self._holidays

    def holidays_between(self, start: date, end: date) -> list[tuple[date, str]]:
        found: list[tuple[date, str]] = []
        current = start
        while current <= end:
            name = self._holidays.get(current)
            if name:
                found.append((current, name))
            current += timedelta(days=1)
        return found


def no_holidays(day: date) -> bool:
    return False


@lru_cache
def get_holiday_calendar() -> HolidayCalendar:
    settings = get_settings()
    return HolidayCalendar(settings.HOLIDAY_COUNTRY, settings.HOLIDAY_SUBDIVISION)


def today(tz_name: str | None = None) -> date:
    """Current calendar date in the configured timezone."""
    tz = ZoneInfo(tz_name or get_settings().TIMEZONE)
    return datetime.now(tz).date()
