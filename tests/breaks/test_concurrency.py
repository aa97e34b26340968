from __future__ import annotations

import random
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime

from src.breaktime_system.breaktime_system.breaks.aggregation import BreakAggregationService
from src.breaktime_system.breaktime_system.breaks.capacity import CapacityGate
from src.breaktime_system.breaktime_system.breaks.memory_break_repository import InMemoryBreakRepository
from src.breaktime_system.breaktime_system.breaks.service import BreakService
from src.breaktime_system.breaktime_system.common.locks import KeyedLocks
from src.breaktime_system.breaktime_system.container import build_container
from src.breaktime_system.breaktime_system.core.exceptions import BreakAlreadyActive, CapacityExceeded

T0 = datetime(2026, 2, 1, 10, 0, 0)


class SlowBreakRepository(InMemoryBreakRepository):
    """Widens the gap between reading the active set and inserting."""

    def count_active_by_type(self, break_type_id: int) -> int:
        count = super().count_active_by_type(break_type_id)
        time.sleep(0.002)
        return count

    def get_active_for_user(self, user_id: int):
        found = super().get_active_for_user(user_id)
        time.sleep(0.002)
        return found


def _slow_service():
    c = build_container(clock=lambda: T0)
    breaks = SlowBreakRepository(c.database)
    gate = CapacityGate(breaks, c.break_types_repo)
    aggregation = BreakAggregationService(breaks, c.break_types_repo, c.users_repo, c.departments_repo)
    service = BreakService(
        breaks,
        c.break_types_repo,
        c.users_repo,
        gate=gate,
        aggregation=aggregation,
        locks=KeyedLocks(),
        clock=lambda: T0,
    )
    return c, breaks, service


def _run_concurrently(calls):
    barrier = threading.Barrier(len(calls))
    outcomes = []
    lock = threading.Lock()

    def _call(fn):
        barrier.wait()
        try:
            result = fn()
        except (BreakAlreadyActive, CapacityExceeded) as e:
            result = e
        with lock:
            outcomes.append(result)

    with ThreadPoolExecutor(max_workers=len(calls)) as pool:
        for f in [pool.submit(_call, fn) for fn in calls]:
            f.result()
    return outcomes


def test_concurrent_starts_never_exceed_type_limit():
    c, breaks, service = _slow_service()
    users = [c.users_repo.create_user(username=f"u{i}", password_hash="x").user_id for i in range(12)]

    outcomes = _run_concurrently([lambda uid=uid: service.start_break(uid, "tea1") for uid in users])

    admitted = [o for o in outcomes if not isinstance(o, Exception)]
    refused = [o for o in outcomes if isinstance(o, CapacityExceeded)]
    assert len(admitted) == 3
    assert len(refused) == 9
    assert all(e.current_count == 3 and e.limit == 3 for e in refused)
    assert breaks.count_active_by_type(1) == 3


def test_concurrent_starts_for_one_user_admit_exactly_one():
    c, breaks, service = _slow_service()
    codes = ["tea1", "tea2", "dinner", "bio"] * 3

    outcomes = _run_concurrently([lambda code=code: service.start_break(1, code) for code in codes])

    admitted = [o for o in outcomes if not isinstance(o, Exception)]
    assert len(admitted) == 1
    assert all(isinstance(o, BreakAlreadyActive) for o in outcomes if isinstance(o, Exception))
    assert len([b for b in c.database.table("breaks").select() if b.user_id == 1 and b.active]) == 1


def test_randomized_start_storm_keeps_invariants():
    rng = random.Random(20260201)
    c, breaks, service = _slow_service()
    users = [c.users_repo.create_user(username=f"r{i}", password_hash="x").user_id for i in range(8)]
    codes = ["tea1", "tea2", "dinner", "bio"]

    calls = [
        (lambda uid=rng.choice(users), code=rng.choice(codes): service.start_break(uid, code))
        for _ in range(24)
    ]
    _run_concurrently(calls)

    active = [b for b in c.database.table("breaks").select() if b.active]
    per_user: dict[int, int] = {}
    for b in active:
        per_user[b.user_id] = per_user.get(b.user_id, 0) + 1
    assert all(n == 1 for n in per_user.values())

    for bt in c.break_types_repo.list_all():
        if not bt.is_unlimited:
            assert breaks.count_active_by_type(bt.break_type_id) <= int(bt.max_concurrent)


def test_unrelated_users_do_not_share_a_lock():
    locks = KeyedLocks()

    assert locks.lock_for(("user", 1)) is locks.lock_for(("user", 1))
    assert locks.lock_for(("user", 1)) is not locks.lock_for(("user", 2))

    with locks.hold(("user", 1)):
        # A different key is free while user 1 is held.
        assert locks.lock_for(("user", 2)).acquire(blocking=False)
        locks.lock_for(("user", 2)).release()
        assert not locks.lock_for(("user", 1)).acquire(blocking=False)
