import calendar
from datetime import datetime, timedelta, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes (SQLite round-trips) as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def add_months(value: datetime, months: int) -> datetime:
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def nights_between(check_in: datetime, check_out: datetime) -> int:
    return (as_utc(check_out).date() - as_utc(check_in).date()).days


def advance(value: datetime, pattern: str) -> datetime:
    if pattern == "daily":
        return value + timedelta(days=1)
    if pattern == "weekly":
        return value + timedelta(weeks=1)
    if pattern == "monthly":
        return add_months(value, 1)
    raise ValueError(f"Unknown recurrence pattern: {pattern}")
