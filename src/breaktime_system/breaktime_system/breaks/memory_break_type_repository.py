from __future__ import annotations

from typing import Optional, Sequence

from ..database.memory_store import InMemoryDatabase
from .model import BreakType, Limit
from .repository import BreakTypeRepository


class InMemoryBreakTypeRepository(BreakTypeRepository):
    def __init__(self, database: InMemoryDatabase):
        self._break_types = database.table("break_types")

    def list_all(self) -> Sequence[BreakType]:
        return self._break_types.select()

    def get_by_id(self, break_type_id: int) -> Optional[BreakType]:
        return self._break_types.get(break_type_id)

    def get_by_code(self, code: str) -> Optional[BreakType]:
        return self._break_types.first(lambda bt: bt.code == code)

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
        return self._break_types.insert(
            lambda break_type_id: BreakType(
                break_type_id=break_type_id,
                code=code,
                name=name,
                description=description or None,
                icon=icon or None,
                max_concurrent=max_concurrent,
                duration_limit=duration_limit,
            ),
            unique=lambda bt: bt.code,
        )
