import re

from waitlist_api.exceptions import ValidationError
from waitlist_api.models.enums import WaitlistStatus

EMAIL_PATTERN = re.compile(r"^[\w\-.]+@([\w-]+\.)+[\w-]{2,4}$")

MAX_PAGE = 10000
MAX_PAGE_SIZE = 100


def normalize_email(email):
    """Trim and lower-case an email, raising ValidationError when malformed."""
    if not isinstance(email, str) or not email.strip():
        raise ValidationError.for_field("email", "Email is required")

    normalized = email.strip().lower()
    if not EMAIL_PATTERN.match(normalized):
        raise ValidationError.for_field(
            "email", "Please provide a valid email address"
        )
    return normalized


def require_fields(data, required_fields):
    if not isinstance(data, dict):
        raise ValidationError("No data provided")

    missing_fields = [
        field
        for field in required_fields
        if data.get(field) is None or data.get(field) == ""
    ]
    if missing_fields:
        raise ValidationError(
            "Missing required fields",
            errors=[
                {"field": field, "message": f"{field} is required"}
                for field in missing_fields
            ],
        )


def require_string_fields(data, fields):
    """Reject fields that are present but not strings."""
    for field in fields:
        value = data.get(field)
        if value is not None and not isinstance(value, str):
            raise ValidationError.for_field(field, f"{field} must be a string")


def parse_positive_int(value, default, maximum=None):
    """Parse a paging value; invalid input falls back to `default`, large input is capped."""
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return default
    if parsed <= 0:
        return default
    if maximum is not None:
        return min(parsed, maximum)
    return parsed


def parse_status(value):
    """Map a status query value to WaitlistStatus; None and 'all' mean no filter."""
    if value is None or value == "" or value == "all":
        return None
    try:
        return WaitlistStatus(value)
    except ValueError:
        raise ValidationError.for_field(
            "status",
            "Status must be one of: all, "
            + ", ".join(status.value for status in WaitlistStatus),
        )
