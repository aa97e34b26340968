from __future__ import annotations

from datetime import date, datetime
from typing import Callable, Optional

from ..common.locks import KeyedLocks
from ..common.datetime_utils import now_local
from ..core.enums import BreakState
from ..core.exceptions import (
    BreakAlreadyActive,
    BreakAlreadyEnded,
    BreakNotFound,
    BreakTypeNotFound,
    CapacityExceeded,
    InvalidBreakTarget,
    UserNotFound,
)
from ..logging import get_logger, log_break_rejected, log_state_transition
from ..users.repository import UserRepository
from .aggregation import BreakAggregationService
from .calculator.base import BreakDurationCalculator
from .calculator.ceiling_calculator import CeilingMinutesCalculator
from .capacity import CapacityGate
from .model import ActiveBreak, BreakWithType, EndedBreak, StartedBreak, limit_to_json
from .repository import BreakRepository, BreakTypeRepository

logger = get_logger(__name__)


class BreakService:
    """Use case: start/end breaks (NONE -> ACTIVE -> ENDED).

    Check-and-create holds the user's lock, then the break type's lock,
    always in that order. End holds only the user's lock.
    """

    def __init__(
        self,
        breaks: BreakRepository,
        break_types: BreakTypeRepository,
        users: UserRepository,
        *,
        gate: CapacityGate,
        aggregation: BreakAggregationService,
        calculator: Optional[BreakDurationCalculator] = None,
        locks: Optional[KeyedLocks] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._breaks = breaks
        self._break_types = break_types
        self._users = users
        self._gate = gate
        self._aggregation = aggregation
        self._calculator = calculator or CeilingMinutesCalculator()
        self._locks = locks or KeyedLocks()
        self._clock = clock

    def today(self) -> date:
        """Current business date."""
        return self._clock().date()

    def start_break(
        self,
        user_id: int,
        break_type_code: str,
        *,
        now: Optional[datetime] = None,
        work_date: Optional[date] = None,
    ) -> StartedBreak:
        if not self._users.get_by_id(user_id):
            raise UserNotFound(user_id)

        break_type = self._break_types.get_by_code(break_type_code)
        if not break_type:
            raise BreakTypeNotFound(break_type_code)

        with self._locks.hold(("user", user_id), ("break_type", break_type.break_type_id)):
            active = self._breaks.get_active_for_user(user_id)
            if active:
                log_break_rejected(logger, "already_active", user_id, {"active_break_id": active.break_id})
                raise BreakAlreadyActive(active)

            snap = self._gate.snapshot_for(break_type)
            if not snap.is_available:
                log_break_rejected(
                    logger,
                    "capacity_exceeded",
                    user_id,
                    {"break_type": break_type.code, "current_count": snap.current_count, "limit": limit_to_json(snap.limit)},
                )
                raise CapacityExceeded(break_type.code, snap.current_count, snap.limit)

            now = now or self._clock()
            created = self._breaks.create_break(
                user_id=user_id,
                break_type_id=break_type.break_type_id,
                start_time=now,
                work_date=work_date or now.date(),
            )

        log_state_transition(
            logger,
            created.break_id,
            "NONE",
            BreakState.ACTIVE.value,
            "start_break",
            {"user_id": user_id, "break_type": break_type.code},
        )
        return StartedBreak(break_=created, break_type=break_type)

    def end_break(self, break_id: int, user_id: int, *, now: Optional[datetime] = None) -> EndedBreak:
        with self._locks.hold(("user", user_id)):
            active = self._breaks.get_active_for_user(user_id)
            if not active:
                raise BreakNotFound(break_id)
            if active.break_id != break_id:
                raise InvalidBreakTarget(break_id, active.break_id)
            if not active.active:
                raise BreakAlreadyEnded(break_id)

            now = now or self._clock()
            minutes = self._calculator.duration_minutes(active.start_time, now)
            ended = self._breaks.end_break(break_id=break_id, end_time=now, duration_minutes=minutes)
            if ended is None:
                raise BreakNotFound(break_id)

        log_state_transition(
            logger,
            ended.break_id,
            BreakState.ACTIVE.value,
            BreakState.ENDED.value,
            "end_break",
            {"user_id": user_id, "duration_minutes": ended.duration_minutes},
        )

        break_type = self._break_types.get_by_id(ended.break_type_id)
        summary = self._aggregation.daily_summary(user_id, ended.work_date)
        return EndedBreak(break_=ended, break_type=break_type, summary=summary)

    def get_active_break(self, user_id: int, *, now: Optional[datetime] = None) -> Optional[ActiveBreak]:
        active = self._breaks.get_active_for_user(user_id)
        if not active:
            return None

        now = now or self._clock()
        elapsed = 0
        if active.start_time is not None:
            elapsed = max(int((now - active.start_time).total_seconds()), 0)
        return ActiveBreak(
            break_=active,
            break_type=self._break_types.get_by_id(active.break_type_id),
            elapsed_seconds=elapsed,
        )

    def history(self, user_id: int, work_date: date) -> list[BreakWithType]:
        """User's breaks for a day, newest first, each with its break type."""
        types = {bt.break_type_id: bt for bt in self._break_types.list_all()}
        return [
            BreakWithType(break_=b, break_type=types.get(b.break_type_id))
            for b in self._breaks.list_for_user_and_date(user_id, work_date)
        ]
