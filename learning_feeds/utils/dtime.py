from datetime import UTC, datetime


def now_aware() -> datetime:
    return datetime.now(tz=UTC)


def ensure_aware(dt: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt
