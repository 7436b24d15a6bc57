from datetime import datetime, timezone

from flask import Blueprint, current_app, jsonify

from waitlist_api.extensions import limiter
from waitlist_api.utils import email as email_utils

health_bp = Blueprint("health", __name__)


@health_bp.route("/health", methods=["GET"])
@limiter.exempt
def health():
    return (
        jsonify(
            {
                "success": True,
                "status": "OK",
                "message": f"{current_app.config['APP_NAME']} API is running",
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "email": email_utils.test_connection(),
            }
        ),
        200,
    )
