from functools import wraps

from flask import current_app, g, request

from waitlist_api.services.admin_auth_service import AdminAuthService


def token_from_request():
    """Bearer token from the Authorization header, else the admin cookie."""
    auth_header = request.headers.get("Authorization", "")
    if auth_header.startswith("Bearer "):
        token = auth_header[len("Bearer "):].strip()
        if token:
            return token
    return request.cookies.get(current_app.config["JWT_ACCESS_COOKIE_NAME"])


def admin_required(fn):
    """Reject the request with AuthError unless it carries a valid admin token.

    The verified identity is exposed as ``g.admin``.
    """

    @wraps(fn)
    def wrapper(*args, **kwargs):
        g.admin = AdminAuthService.verify(token_from_request())
        return fn(*args, **kwargs)

    return wrapper
