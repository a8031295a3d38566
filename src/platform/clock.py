"""
Restaurant wall clock

Reservation times are stored as naive datetimes in the restaurant's local
timezone (RESTAURANT_TIMEZONE). Everything that needs "now" goes through
`local_now()` so tests can pass a fixed instant instead.
"""

import calendar
from datetime import datetime
from functools import lru_cache
from typing import Callable
import zoneinfo

from src.platform.config.core_setting import settings


Clock = Callable[[], datetime]


@lru_cache(maxsize=1)
def _restaurant_tz() -> zoneinfo.ZoneInfo:
    return zoneinfo.ZoneInfo(settings.RESTAURANT_TIMEZONE)


def local_now() -> datetime:
    return datetime.now(_restaurant_tz()).replace(tzinfo=None)


def to_local_naive(moment: datetime) -> datetime:
    """Aware datetimes are converted to restaurant time; naive ones are taken as already local."""
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(_restaurant_tz()).replace(tzinfo=None)


def add_months(moment: datetime, months: int) -> datetime:
    """Calendar month arithmetic; the day is clamped to the target month's last day."""
    month_index = moment.month - 1 + months
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)
