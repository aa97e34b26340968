from __future__ import annotations

from datetime import date, datetime
from typing import Collection, Optional, Sequence

from ..core.exceptions import BreakAlreadyEnded
from ..database.memory_store import InMemoryDatabase
from .model import Break
from .repository import BreakRepository


def _newest_first(breaks: list[Break]) -> list[Break]:
    # Breaks without a start time sort last.
    return sorted(breaks, key=lambda b: (b.start_time is not None, b.start_time or datetime.min), reverse=True)


class InMemoryBreakRepository(BreakRepository):
    def __init__(self, database: InMemoryDatabase):
        self._breaks = database.table("breaks")

    def create_break(
        self,
        *,
        user_id: int,
        break_type_id: int,
        start_time: Optional[datetime],
        work_date: date,
    ) -> Break:
        return self._breaks.insert(
            lambda break_id: Break(
                break_id=break_id,
                user_id=user_id,
                break_type_id=break_type_id,
                work_date=work_date,
                start_time=start_time,
            )
        )

    def get_by_id(self, break_id: int) -> Optional[Break]:
        return self._breaks.get(break_id)

    def end_break(self, *, break_id: int, end_time: datetime, duration_minutes: int) -> Optional[Break]:
        def _end(current: Break) -> Break:
            if not current.active:
                raise BreakAlreadyEnded(break_id)
            return current.ended(end_time=end_time, duration_minutes=duration_minutes)

        return self._breaks.update(break_id, _end)

    def get_active_for_user(self, user_id: int) -> Optional[Break]:
        return self._breaks.first(lambda b: b.user_id == user_id and b.active)

    def count_active_by_type(self, break_type_id: int) -> int:
        return self._breaks.count(lambda b: b.break_type_id == break_type_id and b.active)

    def list_for_user_and_date(self, user_id: int, work_date: date) -> Sequence[Break]:
        return _newest_first(self._breaks.select(lambda b: b.user_id == user_id and b.work_date == work_date))

    def list_for_users_and_date(self, user_ids: Collection[int], work_date: date) -> Sequence[Break]:
        ids = set(user_ids)
        return _newest_first(self._breaks.select(lambda b: b.user_id in ids and b.work_date == work_date))
