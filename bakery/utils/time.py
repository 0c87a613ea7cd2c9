"""Business time zone helpers shared by the scheduling rules.

Every date rule of the shop is evaluated on the calendar of the business time
zone, whatever the server locale. Naive datetimes are interpreted as already
being business-local.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

from bakery.core.config import settings


def business_timezone() -> ZoneInfo:
    return ZoneInfo(settings.business_timezone)


def now_in_business_timezone() -> datetime:
    """Return the current instant expressed in the business time zone."""
    return datetime.now(business_timezone())


def to_business_time(value: datetime) -> datetime:
    """Express ``value`` in the business time zone."""
    if value.tzinfo is None:
        return value.replace(tzinfo=business_timezone())
    return value.astimezone(business_timezone())


def business_date(value: datetime) -> date:
    return to_business_time(value).date()


def day_index(value: datetime) -> int:
    """Return the weekday of ``value`` with weeks starting on Sunday (0) and ending on Saturday (6)."""
    return (to_business_time(value).weekday() + 1) % 7


def days_between(first: datetime, second: datetime) -> int:
    """Return the number of calendar days from ``first`` to ``second``."""
    return (business_date(second) - business_date(first)).days


def is_before_ignoring_hours(first: datetime, second: datetime) -> bool:
    """Return True when ``first`` falls on an earlier calendar day than ``second``."""
    return business_date(first) < business_date(second)


def is_within(value: datetime, start: datetime, end: datetime) -> bool:
    """Return True when ``start <= value <= end`` at full precision."""
    return to_business_time(start) <= to_business_time(value) <= to_business_time(end)


def to_iso_string(value: datetime) -> str:
    """Render ``value`` as a UTC ISO-8601 string with milliseconds, e.g. ``2030-04-02T22:59:59.000Z``."""
    utc_value: datetime = to_business_time(value).astimezone(timezone.utc)
    return f"{utc_value.strftime('%Y-%m-%dT%H:%M:%S')}.{utc_value.microsecond // 1000:03d}Z"
