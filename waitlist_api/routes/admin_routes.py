import time

from flask import Blueprint, Response, g, jsonify, request
from flask_jwt_extended import set_access_cookies

from waitlist_api.auth import admin_required
from waitlist_api.services import AdminAuthService, AdminService
from waitlist_api.utils.validators import (
    MAX_PAGE,
    MAX_PAGE_SIZE,
    parse_positive_int,
    parse_status,
    require_fields,
    require_string_fields,
)

admin_bp = Blueprint("admin", __name__)


@admin_bp.route("/login", methods=["POST"])
def login():
    data = request.get_json(silent=True)
    require_fields(data, ["email", "password"])
    require_string_fields(data, ["email", "password"])

    result = AdminAuthService.login(data["email"], data["password"])
    response = jsonify({"success": True, "message": "Login successful", "data": result})
    set_access_cookies(response, result["token"])
    return response, 200


@admin_bp.route("/verify", methods=["GET"])
@admin_required
def verify():
    return jsonify({"success": True, "message": "Token is valid", "data": g.admin}), 200


@admin_bp.route("/stats", methods=["GET"])
@admin_required
def stats():
    return jsonify({"success": True, "data": AdminService.stats()}), 200


@admin_bp.route("/entries", methods=["GET"])
@admin_required
def get_entries():
    result = AdminService.list_entries(
        page=parse_positive_int(request.args.get("page"), 1, MAX_PAGE),
        limit=parse_positive_int(request.args.get("limit"), 20, MAX_PAGE_SIZE),
        status=parse_status(request.args.get("status")),
        search=request.args.get("search") or None,
    )
    return jsonify({"success": True, "data": result}), 200


@admin_bp.route("/export", methods=["GET"])
@admin_required
def export_csv():
    csv_text = AdminService.export_csv(status=parse_status(request.args.get("status")))
    filename = f"waitlist-{int(time.time() * 1000)}.csv"
    return Response(
        csv_text,
        status=200,
        mimetype="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@admin_bp.route("/entries/<int:entry_id>", methods=["DELETE"])
@admin_required
def delete_entry(entry_id):
    result = AdminService.delete_entry(entry_id)
    return jsonify({"success": True, "message": result["message"]}), 200


@admin_bp.route("/entries/<int:entry_id>/resend-welcome", methods=["POST"])
@admin_required
def resend_welcome(entry_id):
    result = AdminService.resend_welcome(entry_id)
    return (
        jsonify({"success": True, "message": result["message"], "data": result["delivery"]}),
        200,
    )
