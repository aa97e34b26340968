from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http_errors import domain_error_response
from ..common.validators import optional_positive_int
from ..container import Container
from ..core.exceptions import AuthenticationError, DomainError, DuplicateRecordError, NotFoundError, ValidationError


def register(app: Flask, container: Container) -> None:
    def _json_body() -> dict:
        data = request.get_json(silent=True)
        return data if isinstance(data, dict) else {}

    # ===== AUTH =====

    @app.route("/api/auth/login", methods=["POST"], endpoint="api_login")
    def api_login():
        data = _json_body()
        try:
            user = container.auth_service.authenticate(data.get("username", ""), data.get("password", ""))
        except AuthenticationError as e:
            # Missing fields are a bad request, wrong ones are unauthorized.
            status = 400 if not data.get("username") or not data.get("password") else 401
            return jsonify({"error": str(e)}), status
        return jsonify({"user": user.to_dict()})

    @app.route("/api/auth/signup", methods=["POST"], endpoint="api_signup")
    def api_signup():
        data = _json_body()
        try:
            user = container.user_service.create_account(
                username=data.get("username", ""),
                password=data.get("password", ""),
                full_name=data.get("name"),
                dept_id=optional_positive_int(data.get("departmentId"), "departmentId"),
            )
        except DuplicateRecordError as e:
            return jsonify({"error": str(e)}), 400
        except ValidationError as e:
            return domain_error_response(e)
        return jsonify({"user": user.to_dict()}), 201

    # ===== DEPARTMENTS =====

    @app.route("/api/departments", methods=["GET"], endpoint="api_departments")
    def api_departments():
        departments = container.department_service.list_departments()
        return jsonify({"departments": [d.to_dict() for d in departments]})

    @app.route("/api/departments", methods=["POST"], endpoint="api_create_department")
    def api_create_department():
        data = _json_body()
        try:
            dept = container.department_service.create_department(
                dept_name=data.get("name", ""),
                dept_code=data.get("code", ""),
            )
        except (ValidationError, DuplicateRecordError) as e:
            return domain_error_response(e)
        return jsonify({"department": dept.to_dict()}), 201

    @app.route("/api/departments/<int:dept_id>", methods=["GET"], endpoint="api_department")
    def api_department(dept_id: int):
        try:
            dept = container.department_service.get_department(dept_id)
        except NotFoundError:
            return jsonify({"error": "Department not found"}), 404
        return jsonify({"department": dept.to_dict()})

    @app.route("/api/departments/<int:dept_id>/users", methods=["GET"], endpoint="api_department_users")
    def api_department_users(dept_id: int):
        try:
            users = container.department_service.list_users(dept_id)
        except NotFoundError:
            return jsonify({"error": "Department not found"}), 404
        return jsonify({"users": [u.to_dict() for u in users]})

    # ===== USERS =====

    @app.route("/api/users", methods=["GET"], endpoint="api_users")
    def api_users():
        users = container.user_service.list_users()
        return jsonify({"users": [u.to_dict() for u in users]})

    @app.route("/api/users", methods=["POST"], endpoint="api_create_user")
    def api_create_user():
        data = _json_body()
        try:
            user = container.user_service.create_account(
                username=data.get("username", ""),
                password=data.get("password", ""),
                full_name=data.get("name"),
                dept_id=optional_positive_int(data.get("departmentId"), "departmentId"),
            )
        except DomainError as e:
            return domain_error_response(e)
        return jsonify({"user": user.to_dict()}), 201

    @app.route("/api/users/<int:user_id>", methods=["GET"], endpoint="api_user")
    def api_user(user_id: int):
        try:
            user = container.user_service.get_user(user_id)
        except NotFoundError:
            return jsonify({"error": "User not found"}), 404
        return jsonify({"user": user.to_dict()})
