from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...common.datetime_utils import elapsed_minutes_ceil
from .base import BreakDurationCalculator


class CeilingMinutesCalculator(BreakDurationCalculator):
    """Standard rule: ceil((end - start) / 1 minute); a started minute counts in full."""

    def duration_minutes(self, start_time: Optional[datetime], end_time: datetime) -> int:
        return elapsed_minutes_ceil(start_time, end_time)
