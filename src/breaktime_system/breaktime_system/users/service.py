from __future__ import annotations

from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_min_length, require_non_empty
from ..core.exceptions import AuthenticationError, DepartmentNotFound, DuplicateRecordError, UserNotFound
from .department_model import Department
from .department_repository import DepartmentRepository
from .model import User
from .repository import UserRepository


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, username: str, password: str) -> User:
        if not username or not password:
            raise AuthenticationError("Username and password are required")

        user = self._users.get_by_username(username)
        if not user:
            raise AuthenticationError("Invalid username or password")

        try:
            ok = check_password_hash(user.password_hash, password)
        except ValueError:
            # e.g. placeholder hashes or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid username or password")
        return user


class UserService:
    """Use case: manage users (signup, lookups)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def create_account(
        self,
        *,
        username: str,
        password: str,
        full_name: Optional[str] = None,
        dept_id: Optional[int] = None,
    ) -> User:
        username = require_non_empty(username, "Username")
        require_min_length(password, "Password", 6)

        if self._users.get_by_username(username):
            raise DuplicateRecordError("Username already exists")

        password_hash = generate_password_hash(password)
        return self._users.create_user(
            username=username,
            password_hash=password_hash,
            full_name=(full_name or "").strip() or None,
            dept_id=dept_id,
        )

    def get_user(self, user_id: int) -> User:
        user = self._users.get_by_id(user_id)
        if not user:
            raise UserNotFound(user_id)
        return user

    def list_users(self) -> Sequence[User]:
        return self._users.list_all()


class DepartmentService:
    def __init__(self, departments: DepartmentRepository, users: UserRepository):
        self._departments = departments
        self._users = users

    def list_departments(self) -> Sequence[Department]:
        return self._departments.list_all()

    def get_department(self, dept_id: int) -> Department:
        dept = self._departments.get_by_id(dept_id)
        if not dept:
            raise DepartmentNotFound(dept_id)
        return dept

    def create_department(self, *, dept_name: str, dept_code: str) -> Department:
        dept_name = require_non_empty(dept_name, "Department name")
        dept_code = require_non_empty(dept_code, "Department code")
        if self._departments.get_by_code(dept_code):
            raise DuplicateRecordError("Department code already exists")
        return self._departments.create(dept_name=dept_name, dept_code=dept_code)

    def list_users(self, dept_id: int) -> Sequence[User]:
        self.get_department(dept_id)
        return self._users.list_by_department(dept_id)
