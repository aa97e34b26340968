from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import UNLIMITED
from ..logging import get_logger
from .model import BreakAvailability, BreakType, Limit, limit_to_json
from .repository import BreakRepository, BreakTypeRepository

logger = get_logger(__name__)


@dataclass(frozen=True)
class CapacitySnapshot:
    """Current occupancy of one break type, as seen by a single read."""

    break_type: Optional[BreakType]
    current_count: int
    limit: Limit

    @property
    def is_available(self) -> bool:
        if self.break_type is None:
            return False
        if self.limit is UNLIMITED:
            return True
        return self.current_count < int(self.limit)


class CapacityGate:
    """Decide whether one more concurrent break of a type may start.

    Pure read: the check is not atomic with record creation. Callers that act
    on the answer must hold the break type's lock (see BreakService).
    """

    def __init__(self, breaks: BreakRepository, break_types: BreakTypeRepository):
        self._breaks = breaks
        self._break_types = break_types

    def snapshot(self, break_type_code: str) -> CapacitySnapshot:
        break_type = self._break_types.get_by_code(break_type_code)
        if break_type is None:
            return CapacitySnapshot(break_type=None, current_count=0, limit=UNLIMITED)
        return self.snapshot_for(break_type)

    def snapshot_for(self, break_type: BreakType) -> CapacitySnapshot:
        return CapacitySnapshot(
            break_type=break_type,
            current_count=self._breaks.count_active_by_type(break_type.break_type_id),
            limit=break_type.max_concurrent,
        )

    def can_admit(self, break_type_code: str) -> bool:
        """Unknown codes are never admitted; use a break type lookup to tell the two apart."""
        snap = self.snapshot(break_type_code)
        logger.debug(
            "capacity_checked",
            break_type=break_type_code,
            current_count=snap.current_count,
            limit=limit_to_json(snap.limit),
            admitted=snap.is_available,
        )
        return snap.is_available

    def active_count(self, break_type_code: str) -> int:
        return self.snapshot(break_type_code).current_count

    def limit_for(self, break_type_code: str) -> Limit:
        return self.snapshot(break_type_code).limit

    def availability(self) -> list[BreakAvailability]:
        out: list[BreakAvailability] = []
        for bt in self._break_types.list_all():
            snap = self.snapshot_for(bt)
            out.append(
                BreakAvailability(
                    break_type_id=bt.break_type_id,
                    code=bt.code,
                    name=bt.name,
                    is_available=snap.is_available,
                    current_count=snap.current_count,
                    limit=snap.limit,
                )
            )
        return out
