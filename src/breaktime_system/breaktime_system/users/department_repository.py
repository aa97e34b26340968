from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .department_model import Department


class DepartmentRepository(Protocol):
    def list_all(self) -> Sequence[Department]:
        raise NotImplementedError

    def get_by_id(self, dept_id: int) -> Optional[Department]:
        raise NotImplementedError

    def get_by_code(self, dept_code: str) -> Optional[Department]:
        raise NotImplementedError

    def create(self, *, dept_name: str, dept_code: str) -> Department:
        raise NotImplementedError
