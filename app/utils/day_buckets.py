from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Tuple
from zoneinfo import ZoneInfo

ONE_MS = timedelta(milliseconds=1)


def _as_aware(instant: datetime) -> datetime:
    # naive datetimes are treated as UTC
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant


def day_window(instant: datetime, tz_name: str = "UTC") -> Tuple[datetime, datetime]:
    """
    Inclusive bounds of the local calendar day containing ``instant``:
    local midnight through local midnight + 24h - 1ms.
    """
    tz = ZoneInfo(tz_name)
    local = _as_aware(instant).astimezone(tz)
    start = datetime.combine(local.date(), time.min, tzinfo=tz)
    end = start + timedelta(days=1) - ONE_MS
    return start, end


def day_bucket(instant: datetime, tz_name: str = "UTC") -> date:
    start, _ = day_window(instant, tz_name)
    return start.date()


def from_unix(seconds: float) -> datetime:
    return datetime.fromtimestamp(seconds, tz=timezone.utc)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def days_ago_bucket(days: int, tz_name: str = "UTC", now: Optional[datetime] = None) -> date:
    return day_bucket(now or utcnow(), tz_name) - timedelta(days=days)
