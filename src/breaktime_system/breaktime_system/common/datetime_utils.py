from __future__ import annotations

import math
from datetime import date, datetime
from typing import Optional

from ..core.constants import DATE_FORMAT
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date {value!r}, expected YYYY-MM-DD")


def format_iso_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def elapsed_minutes_ceil(start: Optional[datetime], end: datetime) -> int:
    """Whole minutes between start and end, rounded up.

    A missing start counts as ``end`` (0 minutes). With a start time the result
    is never below one minute, so a completed break always has a cost.
    """
    if start is None:
        return 0
    seconds = (end - start).total_seconds()
    return max(1, int(math.ceil(seconds / 60)))


def format_time_display(seconds: int) -> str:
    """Format seconds into MM:SS display."""
    seconds = max(int(seconds), 0)
    return f"{seconds // 60:02d}:{seconds % 60:02d}"


def time_percentage(used: float, total: float) -> float:
    if total == 0:
        return 0.0
    return min(used / total * 100, 100.0)


def is_time_exceeded(used: float, allocated: float) -> bool:
    return used > allocated
