from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from src.breaktime_system.breaktime_system.breaks.memory_break_type_repository import InMemoryBreakTypeRepository
from src.breaktime_system.breaktime_system.database.bootstrap import seed_reference_data
from src.breaktime_system.breaktime_system.database.memory_store import InMemoryDatabase
from src.breaktime_system.breaktime_system.users.memory_department_repository import InMemoryDepartmentRepository
from src.breaktime_system.breaktime_system.users.memory_user_repository import InMemoryUserRepository


def main() -> None:
    """Print the reference data a fresh process starts with."""
    database = InMemoryDatabase()
    departments = InMemoryDepartmentRepository(database)
    break_types = InMemoryBreakTypeRepository(database)
    users = InMemoryUserRepository(database)

    result = seed_reference_data(departments, break_types, users)

    for d in departments.list_all():
        print(f"department {d.dept_id:>2} {d.dept_code:<4} {d.dept_name}")
    for bt in break_types.list_all():
        limit = bt.max_concurrent if not bt.is_unlimited else "unlimited"
        print(f"break type {bt.break_type_id:>2} {bt.code:<7} limit={limit} target={bt.duration_limit}m")
    for u in users.list_all():
        print(f"user       {u.user_id:>2} {u.username} ({u.full_name})")

    print(
        "OK: Seeded in-memory store -> "
        f"departments={result.departments} break_types={result.break_types} users={result.users}"
    )


if __name__ == "__main__":
    main()
