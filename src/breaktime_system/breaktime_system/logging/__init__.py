"""
Logging configuration and utilities for the break-time system.
"""
from .config import configure_logging, get_logger, log_break_rejected, log_state_transition

__all__ = ["configure_logging", "get_logger", "log_break_rejected", "log_state_transition"]
