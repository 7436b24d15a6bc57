class WaitlistAPIError(Exception):
    status_code = 500
    default_message = "An unexpected error occurred"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self):
        return {"success": False, "message": self.message}


class ValidationError(WaitlistAPIError):
    status_code = 400
    default_message = "Validation failed"

    def __init__(self, message=None, errors=None):
        super().__init__(message)
        self.errors = errors or []

    @classmethod
    def for_field(cls, field, message):
        return cls(message, errors=[{"field": field, "message": message}])

    def to_dict(self):
        body = super().to_dict()
        body["errors"] = self.errors
        return body


class AuthError(WaitlistAPIError):
    status_code = 401
    default_message = "Invalid or expired token."


class ForbiddenError(WaitlistAPIError):
    status_code = 403
    default_message = "Access forbidden"


class NotFoundError(WaitlistAPIError):
    status_code = 404
    default_message = "Not found"


class TransientDependencyError(WaitlistAPIError):
    """Raised when the mail transport cannot be reached or is not configured."""

    status_code = 503
    default_message = "Email service is temporarily unavailable"


class InternalError(WaitlistAPIError):
    status_code = 500
    default_message = "Internal server error"
