from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from werkzeug.security import generate_password_hash

from ..breaks.repository import BreakTypeRepository
from ..core.enums import UNLIMITED
from ..users.department_repository import DepartmentRepository
from ..users.repository import UserRepository


@dataclass(frozen=True)
class SeedResult:
    departments: int
    break_types: int
    users: int


DEFAULT_DEPARTMENTS = (
    ("Engineering", "ENG"),
    ("Human Resources", "HR"),
    ("Marketing", "MKT"),
    ("Sales", "SLS"),
    ("Customer Support", "CS"),
)

DEFAULT_BREAK_TYPES = (
    {"code": "tea1", "name": "Tea Break 1", "description": "Morning tea break", "icon": "coffee", "max_concurrent": 3, "duration_limit": 15},
    {"code": "tea2", "name": "Tea Break 2", "description": "Afternoon tea break", "icon": "coffee", "max_concurrent": 3, "duration_limit": 15},
    {"code": "dinner", "name": "Dinner Break", "description": "Lunch/Dinner break", "icon": "utensils", "max_concurrent": 5, "duration_limit": 30},
    {"code": "bio", "name": "Bio Break", "description": "Brief personal break", "icon": "user", "max_concurrent": UNLIMITED, "duration_limit": 10},
)

DEMO_USER = {"username": "jsmith", "password": "password123", "full_name": "John Smith", "dept_code": "ENG"}


def seed_reference_data(
    departments: DepartmentRepository,
    break_types: BreakTypeRepository,
    users: Optional[UserRepository] = None,
) -> SeedResult:
    """Load default departments, break types and the demo user.

    Idempotent: rows whose code/username already exist are left alone.
    """

    n_departments = 0
    for dept_name, dept_code in DEFAULT_DEPARTMENTS:
        if not departments.get_by_code(dept_code):
            departments.create(dept_name=dept_name, dept_code=dept_code)
            n_departments += 1

    n_break_types = 0
    for row in DEFAULT_BREAK_TYPES:
        if not break_types.get_by_code(row["code"]):
            break_types.create(**row)
            n_break_types += 1

    n_users = 0
    if users is not None and not users.get_by_username(DEMO_USER["username"]):
        dept = departments.get_by_code(DEMO_USER["dept_code"])
        users.create_user(
            username=DEMO_USER["username"],
            password_hash=generate_password_hash(DEMO_USER["password"]),
            full_name=DEMO_USER["full_name"],
            dept_id=dept.dept_id if dept else None,
        )
        n_users += 1

    return SeedResult(departments=n_departments, break_types=n_break_types, users=n_users)
