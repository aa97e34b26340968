from __future__ import annotations

import pytest

from src.breaktime_system.breaktime_system.core.exceptions import (
    AuthenticationError,
    DepartmentNotFound,
    DuplicateRecordError,
    UserNotFound,
    ValidationError,
)
from src.breaktime_system.breaktime_system.database.bootstrap import seed_reference_data
from src.breaktime_system.breaktime_system.database.memory_store import InMemoryDatabase
from src.breaktime_system.breaktime_system.breaks.memory_break_type_repository import InMemoryBreakTypeRepository
from src.breaktime_system.breaktime_system.users.memory_department_repository import InMemoryDepartmentRepository
from src.breaktime_system.breaktime_system.users.memory_user_repository import InMemoryUserRepository
from src.breaktime_system.breaktime_system.users.service import AuthService, DepartmentService, UserService


def _repos():
    db = InMemoryDatabase()
    users = InMemoryUserRepository(db)
    departments = InMemoryDepartmentRepository(db)
    break_types = InMemoryBreakTypeRepository(db)
    seed_reference_data(departments, break_types, users)
    return users, departments, break_types


def test_signup_hashes_password_and_login_works():
    users, _, _ = _repos()
    svc = UserService(users)

    user = svc.create_account(username="alice", password="s3cret!", full_name="Alice", dept_id=2)

    assert user.password_hash != "s3cret!"
    assert "password" not in user.to_dict()
    assert AuthService(users).authenticate("alice", "s3cret!").user_id == user.user_id


def test_login_rejects_wrong_password_and_unknown_user():
    users, _, _ = _repos()
    auth = AuthService(users)

    with pytest.raises(AuthenticationError):
        auth.authenticate("jsmith", "nope")
    with pytest.raises(AuthenticationError):
        auth.authenticate("ghost", "password123")


def test_demo_user_can_log_in():
    users, departments, _ = _repos()

    user = AuthService(users).authenticate("jsmith", "password123")

    assert user.full_name == "John Smith"
    assert user.dept_id == departments.get_by_code("ENG").dept_id


def test_duplicate_username_is_rejected():
    users, _, _ = _repos()
    with pytest.raises(DuplicateRecordError):
        UserService(users).create_account(username="jsmith", password="another1")


def test_short_password_is_rejected():
    users, _, _ = _repos()
    with pytest.raises(ValidationError):
        UserService(users).create_account(username="bob", password="123")


def test_user_may_reference_missing_department():
    users, _, _ = _repos()
    user = UserService(users).create_account(username="drifter", password="abcdef", dept_id=999)

    assert user.dept_id == 999


def test_get_user_not_found():
    users, _, _ = _repos()
    with pytest.raises(UserNotFound):
        UserService(users).get_user(999)


def test_department_service_lookups():
    users, departments, _ = _repos()
    svc = DepartmentService(departments, users)

    assert [d.dept_code for d in svc.list_departments()] == ["ENG", "HR", "MKT", "SLS", "CS"]
    assert [u.username for u in svc.list_users(1)] == ["jsmith"]
    with pytest.raises(DepartmentNotFound):
        svc.list_users(99)


def test_department_code_must_be_unique():
    users, departments, _ = _repos()
    svc = DepartmentService(departments, users)

    created = svc.create_department(dept_name="Quality", dept_code="QA")

    assert created.dept_id == 6
    with pytest.raises(DuplicateRecordError):
        svc.create_department(dept_name="Quality again", dept_code="QA")


def test_seeding_is_idempotent():
    users, departments, break_types = _repos()

    result = seed_reference_data(departments, break_types, users)

    assert (result.departments, result.break_types, result.users) == (0, 0, 0)
    assert len(break_types.list_all()) == 4
