from enum import Enum


class WaitlistStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    UNSUBSCRIBED = "unsubscribed"


class AdminRole(Enum):
    ADMIN = "admin"
    SUPERADMIN = "superadmin"
