from __future__ import annotations

from typing import Optional, Sequence

from ..database.memory_store import InMemoryDatabase
from .department_model import Department
from .department_repository import DepartmentRepository


class InMemoryDepartmentRepository(DepartmentRepository):
    def __init__(self, database: InMemoryDatabase):
        self._departments = database.table("departments")

    def list_all(self) -> Sequence[Department]:
        return self._departments.select()

    def get_by_id(self, dept_id: int) -> Optional[Department]:
        return self._departments.get(dept_id)

    def get_by_code(self, dept_code: str) -> Optional[Department]:
        return self._departments.first(lambda d: d.dept_code == dept_code)

    def create(self, *, dept_name: str, dept_code: str) -> Department:
        return self._departments.insert(
            lambda dept_id: Department(dept_id=dept_id, dept_name=dept_name, dept_code=dept_code),
            unique=lambda d: d.dept_code,
        )
