from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Department:
    dept_id: int
    dept_name: str
    dept_code: str

    def to_dict(self) -> dict:
        return {"id": self.dept_id, "name": self.dept_name, "code": self.dept_code}
