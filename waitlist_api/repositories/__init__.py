from waitlist_api.repositories.waitlist_repository import WaitlistRepository
from waitlist_api.repositories.admin_repository import AdminRepository
