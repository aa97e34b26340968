from __future__ import annotations

from datetime import date
from typing import Optional

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.http_errors import domain_error_response
from ..common.validators import require_non_empty, require_positive_int
from ..container import Container
from ..core.exceptions import DomainError, NotFoundError, ValidationError


def register(app: Flask, container: Container) -> None:
    def _json_body() -> dict:
        data = request.get_json(silent=True)
        return data if isinstance(data, dict) else {}

    def _query_date() -> date:
        value: Optional[str] = request.args.get("date")
        if not value:
            return container.break_service.today()
        return parse_iso_date(value)

    def _query_user_id() -> int:
        return require_positive_int(request.args.get("userId"), "userId")

    # ===== BREAK TYPES =====

    @app.route("/api/break-types", methods=["GET"], endpoint="api_break_types")
    def api_break_types():
        break_types = container.break_types_repo.list_all()
        return jsonify({"breakTypes": [bt.to_dict() for bt in break_types]})

    @app.route("/api/break-types/availability", methods=["GET"], endpoint="api_break_availability")
    def api_break_availability():
        availability = container.capacity_gate.availability()
        return jsonify({"availability": [a.to_dict() for a in availability]})

    # ===== BREAK LIFECYCLE =====

    @app.route("/api/breaks/start", methods=["POST"], endpoint="api_break_start")
    def api_break_start():
        data = _json_body()
        try:
            user_id = require_positive_int(data.get("userId"), "userId")
            code = require_non_empty(data.get("breakTypeCode"), "breakTypeCode")
            started = container.break_service.start_break(user_id, code)
        except DomainError as e:
            return domain_error_response(e)
        return jsonify(started.to_dict()), 201

    @app.route("/api/breaks/<int:break_id>/end", methods=["POST"], endpoint="api_break_end")
    def api_break_end(break_id: int):
        data = _json_body()
        try:
            user_id = require_positive_int(data.get("userId"), "userId")
            ended = container.break_service.end_break(break_id, user_id)
        except DomainError as e:
            return domain_error_response(e)
        return jsonify(ended.to_dict())

    @app.route("/api/breaks/active", methods=["GET"], endpoint="api_break_active")
    def api_break_active():
        try:
            user_id = _query_user_id()
        except ValidationError as e:
            return domain_error_response(e)

        active = container.break_service.get_active_break(user_id)
        if not active:
            return jsonify({"activeBreak": None})
        return jsonify(active.to_dict())

    @app.route("/api/breaks/history", methods=["GET"], endpoint="api_break_history")
    def api_break_history():
        try:
            user_id = _query_user_id()
            work_date = _query_date()
        except ValidationError as e:
            return domain_error_response(e)

        rows = container.break_service.history(user_id, work_date)
        return jsonify({"breaks": [r.to_dict() for r in rows]})

    @app.route("/api/breaks/summary", methods=["GET"], endpoint="api_break_summary")
    def api_break_summary():
        try:
            user_id = _query_user_id()
            work_date = _query_date()
        except ValidationError as e:
            return domain_error_response(e)

        summary = container.aggregation_service.daily_summary(user_id, work_date)
        return jsonify({"summary": summary.to_dict()})

    # ===== DEPARTMENT STATISTICS =====

    @app.route("/api/departments/<int:dept_id>/stats", methods=["GET"], endpoint="api_department_stats")
    def api_department_stats(dept_id: int):
        try:
            work_date = _query_date()
            stats = container.aggregation_service.department_stats(dept_id, work_date)
        except NotFoundError:
            return jsonify({"error": "Department not found"}), 404
        except ValidationError as e:
            return domain_error_response(e)
        return jsonify({"stats": stats.to_dict()})
