from datetime import datetime, timezone
from typing import Optional


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Naive timestamps (SQLite, legacy rows) are read as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def is_link_active(link, now: Optional[datetime] = None) -> bool:
    """
    A link is shown when it is not scheduled, or when `now` falls inside
    [schedule_start, schedule_end]. A missing bound is open on that side.
    """
    if not link.is_scheduled:
        return True

    now = as_utc(now) or datetime.now(timezone.utc)
    start = as_utc(link.schedule_start)
    end = as_utc(link.schedule_end)

    if start is not None and now < start:
        return False
    if end is not None and now > end:
        return False
    return True


def filter_active_links(links, now: Optional[datetime] = None) -> list:
    now = now or datetime.now(timezone.utc)
    return [link for link in links if is_link_active(link, now)]
