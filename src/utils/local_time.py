"""
Server-authoritative calendar for the check-in day boundary.

Every "today"/"yesterday" decision goes through this module. Dates are
computed in a single fixed UTC offset (Vietnam time by default), never from
the client's clock and never as a sliding 24-hour window.
"""
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional

from src.config import settings


def local_timezone() -> timezone:
    return timezone(timedelta(hours=settings.CHECK_IN_UTC_OFFSET_HOURS))


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime) -> datetime:
    """Treat naive datetimes (e.g. read back from SQLite) as UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_local_date(dt: datetime) -> date:
    return ensure_utc(dt).astimezone(local_timezone()).date()


def local_today(now: Optional[datetime] = None) -> date:
    return to_local_date(now or utc_now())


def local_day_start_utc(day: date) -> datetime:
    """UTC instant at which the given local calendar day begins."""
    return datetime.combine(day, time.min, tzinfo=local_timezone()).astimezone(timezone.utc)
