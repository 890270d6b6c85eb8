from datetime import datetime, timezone
from typing import Optional


def utc_isoformat(value: Optional[datetime]) -> str:
    """ISO-8601 in UTC with millisecond precision and a ``Z`` suffix.

    SQLite hands timestamps back without tzinfo; those are stored as UTC.
    """
    if value is None:
        return ""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")
