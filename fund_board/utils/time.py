"""Time and calendar utilities (market timezone)."""

import calendar
from datetime import date, datetime
from zoneinfo import ZoneInfo

from fund_board.config import settings

MARKET_TZ = ZoneInfo(settings.TIMEZONE)


def now_market_naive() -> datetime:
    """
    Current time in the market timezone, returned as naive datetime for DB storage.
    """
    return datetime.now(MARKET_TZ).replace(tzinfo=None)


def today_market() -> date:
    """Current calendar date in the market timezone."""
    return datetime.now(MARKET_TZ).date()


def subtract_months(day: date, months: int) -> date:
    """
    Step back a number of calendar months, keeping the day of month.

    When the target month is shorter, the day is clamped to its last day:
    2024-03-31 minus 1 month is 2024-02-29, 2023-03-31 gives 2023-02-28.
    """
    if months < 0:
        raise ValueError("months must be non-negative")

    month_index = day.year * 12 + (day.month - 1) - months
    year, month_zero = divmod(month_index, 12)
    month = month_zero + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))
