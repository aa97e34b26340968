from __future__ import annotations

from datetime import date, datetime
from typing import Collection, Optional, Protocol, Sequence

from .model import Break, BreakType, Limit


class BreakTypeRepository(Protocol):
    """Reference data; ``list_all`` returns types in creation order."""

    def list_all(self) -> Sequence[BreakType]:
        raise NotImplementedError

    def get_by_id(self, break_type_id: int) -> Optional[BreakType]:
        raise NotImplementedError

    def get_by_code(self, code: str) -> Optional[BreakType]:
        raise NotImplementedError

    def create(
        self,
        *,
        code: str,
        name: str,
        description: Optional[str] = None,
        icon: Optional[str] = None,
        max_concurrent: Limit,
        duration_limit: Optional[int] = None,
    ) -> BreakType:
        raise NotImplementedError


class BreakRepository(Protocol):
    def create_break(
        self,
        *,
        user_id: int,
        break_type_id: int,
        start_time: Optional[datetime],
        work_date: date,
    ) -> Break:
        raise NotImplementedError

    def get_by_id(self, break_id: int) -> Optional[Break]:
        raise NotImplementedError

    def end_break(self, *, break_id: int, end_time: datetime, duration_minutes: int) -> Optional[Break]:
        """Move an active break to ENDED. Raises BreakAlreadyEnded if it already ended."""

        raise NotImplementedError

    def get_active_for_user(self, user_id: int) -> Optional[Break]:
        raise NotImplementedError

    def count_active_by_type(self, break_type_id: int) -> int:
        raise NotImplementedError

    def list_for_user_and_date(self, user_id: int, work_date: date) -> Sequence[Break]:
        raise NotImplementedError

    def list_for_users_and_date(self, user_ids: Collection[int], work_date: date) -> Sequence[Break]:
        raise NotImplementedError
