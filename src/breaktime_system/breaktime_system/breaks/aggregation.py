from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Iterable, Sequence

from ..common.datetime_utils import is_time_exceeded, time_percentage
from ..core.constants import DEFAULT_DAILY_BREAK_BUDGET_MINUTES
from ..core.exceptions import DepartmentNotFound
from ..users.department_repository import DepartmentRepository
from ..users.repository import UserRepository
from .model import Break, BreakTypeStat, BreakTypeUsage, DailySummary, DepartmentBreakStats
from .repository import BreakRepository, BreakTypeRepository


def _minutes(b: Break) -> int:
    # In-progress breaks have no duration yet and count as zero.
    return int(b.duration_minutes or 0)


def _sum_minutes(breaks: Iterable[Break]) -> int:
    return sum(_minutes(b) for b in breaks)


def _per_employee(total: int, employee_count: int) -> float:
    return total / employee_count if employee_count > 0 else 0


class BreakAggregationService:
    """Derived, never stored: daily per-user summary and per-department stats.

    Every call rescans the break set for the requested scope and date, O(breaks).
    Per-type rows follow break type creation order.
    """

    def __init__(
        self,
        breaks: BreakRepository,
        break_types: BreakTypeRepository,
        users: UserRepository,
        departments: DepartmentRepository,
        *,
        daily_budget_minutes: int = DEFAULT_DAILY_BREAK_BUDGET_MINUTES,
    ):
        self._breaks = breaks
        self._break_types = break_types
        self._users = users
        self._departments = departments
        self._budget = int(daily_budget_minutes)

    def daily_summary(self, user_id: int, work_date: date) -> DailySummary:
        user_breaks = self._breaks.list_for_user_and_date(user_id, work_date)
        return self._summarize(user_breaks)

    def _summarize(self, user_breaks: Sequence[Break]) -> DailySummary:
        used_by_type: dict[int, int] = defaultdict(int)
        for b in user_breaks:
            used_by_type[b.break_type_id] += _minutes(b)

        usage: list[BreakTypeUsage] = []
        total_used = 0
        for bt in self._break_types.list_all():
            used = used_by_type.get(bt.break_type_id, 0)
            limit = int(bt.duration_limit or 0)
            total_used += used
            usage.append(
                BreakTypeUsage(
                    break_type_id=bt.break_type_id,
                    code=bt.code,
                    name=bt.name,
                    duration_used=used,
                    duration_limit=limit,
                    icon=bt.icon or "",
                    # A type without a duration limit is never over it.
                    exceeded=limit > 0 and is_time_exceeded(used, limit),
                )
            )

        return DailySummary(
            total_used=total_used,
            total_remaining=max(0, self._budget - total_used),
            total_exceeded=max(0, total_used - self._budget),
            break_type_usage=tuple(usage),
            budget_minutes=self._budget,
            percent_used=time_percentage(total_used, self._budget),
        )

    def department_stats(self, dept_id: int, work_date: date) -> DepartmentBreakStats:
        dept = self._departments.get_by_id(dept_id)
        if not dept:
            raise DepartmentNotFound(dept_id)

        members = self._users.list_by_department(dept_id)
        employee_count = len(members)
        dept_breaks = self._breaks.list_for_users_and_date([u.user_id for u in members], work_date)

        total = _sum_minutes(dept_breaks)

        # Grouped here rather than via daily_summary: the breaks are already fetched.
        per_user: dict[int, int] = defaultdict(int)
        per_type: dict[int, int] = defaultdict(int)
        for b in dept_breaks:
            per_user[b.user_id] += _minutes(b)
            per_type[b.break_type_id] += _minutes(b)
        exceeded_count = sum(1 for minutes in per_user.values() if minutes > self._budget)

        type_stats = tuple(
            BreakTypeStat(
                break_type_id=bt.break_type_id,
                break_type_name=bt.name,
                total_usage=per_type.get(bt.break_type_id, 0),
                average_usage=_per_employee(per_type.get(bt.break_type_id, 0), employee_count),
            )
            for bt in self._break_types.list_all()
        )

        return DepartmentBreakStats(
            department_id=dept.dept_id,
            department_name=dept.dept_name,
            department_code=dept.dept_code,
            employee_count=employee_count,
            total_break_minutes=total,
            average_break_minutes=_per_employee(total, employee_count),
            exceeded_count=exceeded_count,
            break_type_stats=type_stats,
        )
