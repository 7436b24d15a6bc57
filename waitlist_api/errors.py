from flask import current_app, jsonify
from werkzeug.exceptions import HTTPException

from waitlist_api.exceptions import WaitlistAPIError

RATE_LIMIT_MESSAGE = "Too many requests from this IP, please try again later."


def _is_development():
    return current_app.config.get("ENV_NAME") == "development"


def register_error_handlers(app):
    @app.errorhandler(WaitlistAPIError)
    def handle_api_error(e):
        body = e.to_dict()
        if e.status_code >= 500:
            current_app.logger.error(f"{type(e).__name__}: {e.message}")
            if _is_development() and e.__cause__ is not None:
                body["error"] = str(e.__cause__)
        return jsonify(body), e.status_code

    @app.errorhandler(429)
    def handle_rate_limit(e):
        return jsonify({"success": False, "message": RATE_LIMIT_MESSAGE}), 429

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return jsonify({"success": False, "message": e.description}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        current_app.logger.exception(f"Unhandled error: {str(e)}")
        body = {"success": False, "message": "Internal server error"}
        if _is_development():
            body["error"] = str(e)
        return jsonify(body), 500
