from flask import Blueprint, jsonify, request

from waitlist_api.errors import RATE_LIMIT_MESSAGE
from waitlist_api.extensions import limiter
from waitlist_api.services import WaitlistService
from waitlist_api.utils.validators import (
    MAX_PAGE,
    MAX_PAGE_SIZE,
    parse_positive_int,
    require_fields,
    require_string_fields,
)

waitlist_bp = Blueprint("waitlist", __name__)

JOIN_RATE_LIMIT = "5 per 15 minutes"


@waitlist_bp.route("/join", methods=["POST"])
@limiter.limit(JOIN_RATE_LIMIT, error_message=RATE_LIMIT_MESSAGE)
def join():
    data = request.get_json(silent=True)
    require_fields(data, ["email"])
    require_string_fields(data, ["email", "referralSource"])

    result = WaitlistService.join(
        data["email"],
        referral_source=data.get("referralSource"),
        ip_address=request.remote_addr,
        user_agent=request.headers.get("User-Agent"),
    )
    status_code = 201 if result["created"] else 200
    return (
        jsonify({"success": True, "message": result["message"], "data": result["data"]}),
        status_code,
    )


@waitlist_bp.route("/stats", methods=["GET"])
def stats():
    return jsonify({"success": True, "data": WaitlistService.stats()}), 200


# Unauthenticated although it exposes every signup; kept for the public
# dashboard until it moves behind admin auth.
@waitlist_bp.route("/all", methods=["GET"])
def get_all():
    page = parse_positive_int(request.args.get("page"), 1, MAX_PAGE)
    limit = parse_positive_int(request.args.get("limit"), 50, MAX_PAGE_SIZE)
    return jsonify({"success": True, "data": WaitlistService.list_all(page, limit)}), 200


@waitlist_bp.route("/confirm/<token>", methods=["GET"])
def confirm(token):
    result = WaitlistService.confirm(token)
    return jsonify({"success": True, "message": result["message"]}), 200


@waitlist_bp.route("/unsubscribe", methods=["POST"])
def unsubscribe():
    data = request.get_json(silent=True)
    require_fields(data, ["email"])

    result = WaitlistService.unsubscribe(data["email"])
    return jsonify({"success": True, "message": result["message"]}), 200
