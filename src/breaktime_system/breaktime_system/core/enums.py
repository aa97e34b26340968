from __future__ import annotations

from enum import Enum


class BreakState(str, Enum):
    """Vòng đời của một lượt nghỉ: ACTIVE -> ENDED (không quay lại)."""

    ACTIVE = "ACTIVE"
    ENDED = "ENDED"


class Capacity(str, Enum):
    """Giới hạn số lượt nghỉ đồng thời không bị chặn."""

    UNLIMITED = "unlimited"


UNLIMITED = Capacity.UNLIMITED
