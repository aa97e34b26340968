from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Optional, Union

from ..common.datetime_utils import format_iso_date, format_time_display
from ..core.enums import BreakState, Capacity, UNLIMITED

Limit = Union[int, Capacity]


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def limit_to_json(limit: Limit) -> Union[int, str]:
    return limit.value if isinstance(limit, Capacity) else int(limit)


@dataclass(frozen=True)
class BreakType:
    """Thực thể miền (domain): Loại nghỉ (tea1, dinner, bio, ...).

    Reference data: configured at startup and read-only afterwards.
    ``duration_limit`` is the target length in minutes, used only for reporting.
    """

    break_type_id: int
    code: str
    name: str
    description: Optional[str] = None
    icon: Optional[str] = None
    max_concurrent: Limit = UNLIMITED
    duration_limit: Optional[int] = None

    @property
    def is_unlimited(self) -> bool:
        return self.max_concurrent is UNLIMITED

    def to_dict(self) -> dict:
        return {
            "id": self.break_type_id,
            "code": self.code,
            "name": self.name,
            "description": self.description,
            "icon": self.icon,
            "maxConcurrent": limit_to_json(self.max_concurrent),
            "durationLimit": self.duration_limit,
        }


@dataclass(frozen=True)
class Break:
    """Thực thể miền (domain): Một lượt nghỉ.

    ``work_date`` is the business day the break counts against.
    active <=> end_time is None <=> duration_minutes is None.
    """

    break_id: int
    user_id: int
    break_type_id: int
    work_date: date
    start_time: Optional[datetime]
    end_time: Optional[datetime] = None
    duration_minutes: Optional[int] = None
    active: bool = True

    @property
    def state(self) -> BreakState:
        return BreakState.ACTIVE if self.active else BreakState.ENDED

    def ended(self, *, end_time: datetime, duration_minutes: int) -> "Break":
        return replace(self, end_time=end_time, duration_minutes=int(duration_minutes), active=False)

    def to_dict(self) -> dict:
        return {
            "id": self.break_id,
            "userId": self.user_id,
            "breakTypeId": self.break_type_id,
            "startTime": _iso(self.start_time),
            "endTime": _iso(self.end_time),
            "durationMinutes": self.duration_minutes,
            "active": self.active,
            "date": format_iso_date(self.work_date),
        }


@dataclass(frozen=True)
class StartedBreak:
    break_: Break
    break_type: BreakType

    def to_dict(self) -> dict:
        return {"break": self.break_.to_dict(), "breakType": self.break_type.to_dict()}


@dataclass(frozen=True)
class BreakTypeUsage:
    break_type_id: int
    code: str
    name: str
    duration_used: int
    duration_limit: int
    icon: str = ""
    exceeded: bool = False

    def to_dict(self) -> dict:
        return {
            "breakTypeId": self.break_type_id,
            "code": self.code,
            "name": self.name,
            "durationUsed": self.duration_used,
            "durationLimit": self.duration_limit,
            "icon": self.icon,
            "exceeded": self.exceeded,
        }


@dataclass(frozen=True)
class DailySummary:
    total_used: int
    total_remaining: int
    total_exceeded: int
    break_type_usage: tuple[BreakTypeUsage, ...]
    budget_minutes: int
    percent_used: float = 0.0

    def to_dict(self) -> dict:
        return {
            "totalUsed": self.total_used,
            "totalRemaining": self.total_remaining,
            "totalExceeded": self.total_exceeded,
            "budgetMinutes": self.budget_minutes,
            "percentUsed": self.percent_used,
            "breakTypeUsage": [u.to_dict() for u in self.break_type_usage],
        }


@dataclass(frozen=True)
class EndedBreak:
    break_: Break
    break_type: Optional[BreakType]
    summary: DailySummary

    def to_dict(self) -> dict:
        return {
            "break": self.break_.to_dict(),
            "breakType": self.break_type.to_dict() if self.break_type else None,
            "summary": self.summary.to_dict(),
        }


@dataclass(frozen=True)
class ActiveBreak:
    break_: Break
    break_type: Optional[BreakType]
    elapsed_seconds: int = 0

    def to_dict(self) -> dict:
        return {
            "activeBreak": self.break_.to_dict(),
            "breakType": self.break_type.to_dict() if self.break_type else None,
            "elapsedSeconds": self.elapsed_seconds,
            "elapsedDisplay": format_time_display(self.elapsed_seconds),
        }


@dataclass(frozen=True)
class BreakWithType:
    break_: Break
    break_type: Optional[BreakType]

    def to_dict(self) -> dict:
        data = self.break_.to_dict()
        data["breakType"] = self.break_type.to_dict() if self.break_type else None
        return data


@dataclass(frozen=True)
class BreakTypeStat:
    break_type_id: int
    break_type_name: str
    total_usage: int
    average_usage: float

    def to_dict(self) -> dict:
        return {
            "breakTypeId": self.break_type_id,
            "breakTypeName": self.break_type_name,
            "totalUsage": self.total_usage,
            "averageUsage": self.average_usage,
        }


@dataclass(frozen=True)
class DepartmentBreakStats:
    department_id: int
    department_name: str
    department_code: str
    employee_count: int
    total_break_minutes: int
    average_break_minutes: float
    exceeded_count: int
    break_type_stats: tuple[BreakTypeStat, ...]

    def to_dict(self) -> dict:
        return {
            "departmentId": self.department_id,
            "departmentName": self.department_name,
            "departmentCode": self.department_code,
            "employeeCount": self.employee_count,
            "totalBreakMinutes": self.total_break_minutes,
            "averageBreakMinutes": self.average_break_minutes,
            "exceededCount": self.exceeded_count,
            "breakTypeStats": [s.to_dict() for s in self.break_type_stats],
        }


@dataclass(frozen=True)
class BreakAvailability:
    break_type_id: int
    code: str
    name: str
    is_available: bool
    current_count: int
    limit: Limit

    def to_dict(self) -> dict:
        return {
            "breakTypeId": self.break_type_id,
            "code": self.code,
            "name": self.name,
            "isAvailable": self.is_available,
            "currentCount": self.current_count,
            "limit": limit_to_json(self.limit),
        }
