from waitlist_api.models.waitlist_entry import WaitlistEntry
from waitlist_api.models.admin import Admin
from waitlist_api.models.enums import WaitlistStatus, AdminRole
