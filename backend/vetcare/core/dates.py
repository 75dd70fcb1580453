"""Module: dates.

All datetimes are stored as naive UTC values, matching the ``datetime.utcnow``
defaults used on the models. Helpers here convert incoming values and compute
clinic-local day windows.
"""

import calendar
import logging
from datetime import UTC, date, datetime, time, timedelta
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(UTC).replace(tzinfo=None)


def as_utc_naive(value: datetime | None) -> datetime | None:
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)


def add_months(value: date, months: int) -> date:
    """Shift ``value`` by calendar months, clamping to the target month's last day."""
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def utc_day_range(now: datetime | None = None, days_ahead: int = 0) -> tuple[datetime, datetime]:
    # [start of today, end of today + days_ahead] in UTC.
    current = now or utcnow()
    start = datetime.combine(current.date(), time.min)
    end = datetime.combine(current.date() + timedelta(days=days_ahead), time.max)
    return start, end


def clinic_day_range(
    timezone: str | None,
    now: datetime | None = None,
    days_ahead: int = 0,
) -> tuple[datetime, datetime]:
    """
    Return the clinic-local day window as naive UTC bounds.

    ``now`` is a naive UTC instant. Unknown timezones fall back to UTC.
    """
    current = now or utcnow()
    try:
        zone = ZoneInfo(timezone or "UTC")
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Invalid timezone %r, falling back to UTC", timezone)
        return utc_day_range(current, days_ahead)

    local_now = current.replace(tzinfo=UTC).astimezone(zone)
    local_start = datetime.combine(local_now.date(), time.min, tzinfo=zone)
    local_end = datetime.combine(local_now.date() + timedelta(days=days_ahead), time.max, tzinfo=zone)
    return as_utc_naive(local_start), as_utc_naive(local_end)


def start_of_utc_day(value: datetime | None) -> datetime | None:
    # Reminder dates are day-granular: keep the calendar date, drop the time.
    if value is None:
        return None
    return datetime.combine(as_utc_naive(value).date(), time.min)
