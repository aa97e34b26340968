from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional


class BreakDurationCalculator(ABC):
    """Calculator interface (Strategy Pattern for break cost)."""

    @abstractmethod
    def duration_minutes(self, start_time: Optional[datetime], end_time: datetime) -> int:
        raise NotImplementedError
