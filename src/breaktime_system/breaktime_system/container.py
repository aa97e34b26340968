from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from .breaks.aggregation import BreakAggregationService
from .breaks.capacity import CapacityGate
from .breaks.memory_break_repository import InMemoryBreakRepository
from .breaks.memory_break_type_repository import InMemoryBreakTypeRepository
from .breaks.service import BreakService
from .common.datetime_utils import now_local
from .common.locks import KeyedLocks
from .core.constants import DEFAULT_DAILY_BREAK_BUDGET_MINUTES
from .database.bootstrap import seed_reference_data
from .database.memory_store import InMemoryDatabase
from .users.memory_department_repository import InMemoryDepartmentRepository
from .users.memory_user_repository import InMemoryUserRepository
from .users.service import AuthService, DepartmentService, UserService


@dataclass(frozen=True)
class Container:
    database: InMemoryDatabase

    users_repo: InMemoryUserRepository
    departments_repo: InMemoryDepartmentRepository
    break_types_repo: InMemoryBreakTypeRepository
    breaks_repo: InMemoryBreakRepository

    auth_service: AuthService
    user_service: UserService
    department_service: DepartmentService
    capacity_gate: CapacityGate
    aggregation_service: BreakAggregationService
    break_service: BreakService

    def close(self) -> None:
        self.database.close()


def build_container(
    *,
    daily_budget_minutes: int = DEFAULT_DAILY_BREAK_BUDGET_MINUTES,
    seed_defaults: bool = True,
    clock: Callable[[], datetime] = now_local,
) -> Container:
    database = InMemoryDatabase()

    users_repo = InMemoryUserRepository(database)
    departments_repo = InMemoryDepartmentRepository(database)
    break_types_repo = InMemoryBreakTypeRepository(database)
    breaks_repo = InMemoryBreakRepository(database)

    if seed_defaults:
        seed_reference_data(departments_repo, break_types_repo, users_repo)

    auth_service = AuthService(users_repo)
    user_service = UserService(users_repo)
    department_service = DepartmentService(departments_repo, users_repo)
    capacity_gate = CapacityGate(breaks_repo, break_types_repo)
    aggregation_service = BreakAggregationService(
        breaks_repo,
        break_types_repo,
        users_repo,
        departments_repo,
        daily_budget_minutes=daily_budget_minutes,
    )
    break_service = BreakService(
        breaks_repo,
        break_types_repo,
        users_repo,
        gate=capacity_gate,
        aggregation=aggregation_service,
        locks=KeyedLocks(),
        clock=clock,
    )

    return Container(
        database=database,
        users_repo=users_repo,
        departments_repo=departments_repo,
        break_types_repo=break_types_repo,
        breaks_repo=breaks_repo,
        auth_service=auth_service,
        user_service=user_service,
        department_service=department_service,
        capacity_gate=capacity_gate,
        aggregation_service=aggregation_service,
        break_service=break_service,
    )
