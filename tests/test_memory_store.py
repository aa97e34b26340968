from __future__ import annotations

import pytest

from src.breaktime_system.breaktime_system.core.exceptions import DuplicateRecordError
from src.breaktime_system.breaktime_system.database.memory_store import InMemoryDatabase, StoreUnavailableError
from src.breaktime_system.breaktime_system.users.memory_department_repository import InMemoryDepartmentRepository


def test_ids_increase_monotonically():
    repo = InMemoryDepartmentRepository(InMemoryDatabase())

    a = repo.create(dept_name="A", dept_code="A")
    b = repo.create(dept_name="B", dept_code="B")

    assert (a.dept_id, b.dept_id) == (1, 2)
    assert [d.dept_code for d in repo.list_all()] == ["A", "B"]


def test_unique_code_is_enforced_without_consuming_an_id():
    repo = InMemoryDepartmentRepository(InMemoryDatabase())
    repo.create(dept_name="A", dept_code="A")

    with pytest.raises(DuplicateRecordError):
        repo.create(dept_name="Again", dept_code="A")

    assert repo.create(dept_name="B", dept_code="B").dept_id == 2


def test_update_of_missing_record_returns_none():
    table = InMemoryDatabase().table("breaks")

    assert table.update(42, lambda r: r) is None


def test_closed_store_is_unavailable():
    database = InMemoryDatabase()
    repo = InMemoryDepartmentRepository(database)
    database.close()

    assert database.is_open is False
    with pytest.raises(StoreUnavailableError):
        repo.list_all()


def test_unknown_table():
    with pytest.raises(StoreUnavailableError):
        InMemoryDatabase().table("shifts")
