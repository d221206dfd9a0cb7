from datetime import datetime, timezone
from typing import List, Optional, Union


def split_tags(value: Optional[Union[List[str], str]]) -> List[str]:
    """Accept a list or a comma-separated string; trim and drop empties"""
    if value is None:
        return []
    parts = value.split(",") if isinstance(value, str) else value
    return [str(p).strip() for p in parts if str(p).strip()]


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Timestamps are stored as naive UTC"""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
