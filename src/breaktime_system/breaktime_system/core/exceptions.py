from __future__ import annotations

from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from ..breaks.model import Break
    from .enums import Capacity


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class DuplicateRecordError(DomainError):
    """Raised when a unique field (username, code) is already taken."""


class NotFoundError(DomainError):
    """Caller input referenced a nonexistent entity."""


class UserNotFound(NotFoundError):
    def __init__(self, user_id: int):
        super().__init__("User not found")
        self.user_id = user_id


class BreakTypeNotFound(NotFoundError):
    def __init__(self, code: str):
        super().__init__("Break type not found")
        self.code = code


class DepartmentNotFound(NotFoundError):
    def __init__(self, department_id: int):
        super().__init__(f"Department with ID {department_id} not found")
        self.department_id = department_id


class BreakNotFound(NotFoundError):
    def __init__(self, break_id: int, message: str = "Break not found"):
        super().__init__(message)
        self.break_id = break_id


class InvalidBreakTarget(BreakNotFound):
    """End requested for a break that is not the caller's current active break."""

    def __init__(self, break_id: int, active_break_id: int):
        super().__init__(break_id, f"Break {break_id} is not your active break")
        self.active_break_id = active_break_id


class BreakAlreadyActive(DomainError):
    def __init__(self, active_break: "Break"):
        super().__init__("User already has an active break")
        self.active_break = active_break


class CapacityExceeded(DomainError):
    def __init__(self, break_type_code: str, current_count: int, limit: Union[int, "Capacity"]):
        super().__init__(f"Break type limit reached. Current: {current_count}, Limit: {limit}")
        self.break_type_code = break_type_code
        self.current_count = current_count
        self.limit = limit


class BreakAlreadyEnded(DomainError):
    def __init__(self, break_id: int):
        super().__init__("Break is already ended")
        self.break_id = break_id
