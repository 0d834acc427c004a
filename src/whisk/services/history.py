"""Recency buckets used to section a user's saved recipes."""

from datetime import datetime
from typing import Iterable, List, Optional, Tuple, TypeVar

from ..models.record import RecipeRecord

TODAY = "Today"
YESTERDAY = "Yesterday"
LAST_WEEK = "In The Last Week"
LAST_MONTH = "In The Last Month"
LAST_YEAR = "In The Last Year"

R = TypeVar("R", bound=RecipeRecord)


def time_group(timestamp: Optional[datetime], now: Optional[datetime] = None) -> str:
    """Label a timestamp by how many calendar days ago it falls."""
    now = now or datetime.now(timestamp.tzinfo if timestamp else None)
    timestamp = timestamp or now
    if timestamp.tzinfo is not None and now.tzinfo is not None:
        timestamp = timestamp.astimezone(now.tzinfo)

    diff = (now.date() - timestamp.date()).days
    if diff <= 0:
        return TODAY
    if diff == 1:
        return YESTERDAY
    if diff < 7:
        return LAST_WEEK
    if diff < 30:
        return LAST_MONTH
    return LAST_YEAR


def group_by_time(records: Iterable[R], now: Optional[datetime] = None) -> List[Tuple[str, List[R]]]:
    """Bucket records by `time_group`, preserving input order within and across buckets."""
    buckets: dict = {}
    for record in records:
        buckets.setdefault(time_group(record.timestamp, now), []).append(record)
    return list(buckets.items())
