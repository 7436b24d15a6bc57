from waitlist_api.services.waitlist_service import WaitlistService
from waitlist_api.services.admin_auth_service import AdminAuthService
from waitlist_api.services.admin_service import AdminService
