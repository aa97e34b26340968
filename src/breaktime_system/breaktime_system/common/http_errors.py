from __future__ import annotations

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from ..breaks.model import limit_to_json
from ..core.exceptions import (
    AuthenticationError,
    BreakAlreadyActive,
    BreakAlreadyEnded,
    CapacityExceeded,
    DomainError,
    DuplicateRecordError,
    InvalidBreakTarget,
    NotFoundError,
    ValidationError,
)
from ..logging import get_logger

logger = get_logger(__name__)

# First match wins; subclasses before their bases.
_STATUS_BY_ERROR: tuple[tuple[type[DomainError], int], ...] = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (NotFoundError, 404),
    (BreakAlreadyActive, 409),
    (CapacityExceeded, 409),
    (BreakAlreadyEnded, 409),
    (DuplicateRecordError, 409),
)


def status_for(exc: DomainError) -> int:
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status
    return 400


def error_payload(exc: DomainError) -> dict:
    payload: dict = {"error": str(exc), "kind": type(exc).__name__}
    if isinstance(exc, BreakAlreadyActive):
        payload["activeBreak"] = exc.active_break.to_dict()
    elif isinstance(exc, CapacityExceeded):
        payload.update(
            currentCount=exc.current_count,
            limit=limit_to_json(exc.limit),
            breakTypeCode=exc.break_type_code,
        )
    elif isinstance(exc, InvalidBreakTarget):
        payload.update(breakId=exc.break_id, activeBreakId=exc.active_break_id)
    return payload


def domain_error_response(exc: DomainError):
    return jsonify(error_payload(exc)), status_for(exc)


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def _domain_error(exc: DomainError):
        return domain_error_response(exc)

    @app.errorhandler(HTTPException)
    def _http_error(exc: HTTPException):
        return jsonify({"error": exc.description or exc.name}), exc.code or 500

    @app.errorhandler(Exception)
    def _unexpected(exc: Exception):
        logger.error("unhandled_error", error=str(exc), exc_info=True)
        return jsonify({"error": "Internal server error"}), 500
