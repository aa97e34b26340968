from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class User:
    """Thực thể miền (domain): User.

    Lưu ý: Đây là đối tượng dữ liệu thuần (không chứa code truy cập DB).
    ``dept_id`` is a weak reference: it may point at a department that does not exist.
    """

    user_id: int
    username: str
    password_hash: str
    full_name: Optional[str] = None
    dept_id: Optional[int] = None

    def to_dict(self) -> dict:
        # Credentials never leave the service.
        return {
            "id": self.user_id,
            "username": self.username,
            "name": self.full_name,
            "departmentId": self.dept_id,
        }
