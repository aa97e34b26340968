from __future__ import annotations

from typing import Optional, Sequence

from ..database.memory_store import InMemoryDatabase
from .model import User
from .repository import UserRepository


class InMemoryUserRepository(UserRepository):
    def __init__(self, database: InMemoryDatabase):
        self._users = database.table("users")

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._users.get(user_id)

    def get_by_username(self, username: str) -> Optional[User]:
        return self._users.first(lambda u: u.username == username)

    def create_user(
        self,
        *,
        username: str,
        password_hash: str,
        full_name: Optional[str] = None,
        dept_id: Optional[int] = None,
    ) -> User:
        return self._users.insert(
            lambda user_id: User(
                user_id=user_id,
                username=username,
                password_hash=password_hash,
                full_name=full_name or None,
                dept_id=dept_id or None,
            ),
            unique=lambda u: u.username,
        )

    def list_all(self) -> Sequence[User]:
        return self._users.select()

    def list_by_department(self, dept_id: int) -> Sequence[User]:
        return self._users.select(lambda u: u.dept_id == dept_id)
