"""Example: drive the service layer directly (no Flask).

Controllers are thin; the break rules live in the services.
"""

import importlib
from datetime import datetime, timedelta

from config import get_settings_module

from src.breaktime_system.breaktime_system.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(daily_budget_minutes=settings.DAILY_BREAK_BUDGET_MINUTES)

    start = datetime.now().replace(microsecond=0)
    started = container.break_service.start_break(1, "tea1", now=start)
    print("started:", started.to_dict())
    print("availability:", [a.to_dict() for a in container.capacity_gate.availability()])

    ended = container.break_service.end_break(started.break_.break_id, 1, now=start + timedelta(minutes=14, seconds=30))
    print("ended:", ended.break_.duration_minutes, "min")
    print("summary:", ended.summary.to_dict())

    container.close()


if __name__ == "__main__":
    main()
