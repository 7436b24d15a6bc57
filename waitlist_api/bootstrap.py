"""
Provisioning of the bootstrap admin account from environment credentials.
"""
import logging

from waitlist_api.models import Admin
from waitlist_api.models.enums import AdminRole
from waitlist_api.repositories import AdminRepository
from waitlist_api.utils.validators import normalize_email

logger = logging.getLogger(__name__)

DEFAULT_ADMIN_EMAIL = "admin@example.com"


class BootstrapError(Exception):
    pass


def create_bootstrap_admin(admin_email, admin_password, update=False):
    """Create the superadmin account if it does not exist yet.

    Returns "created", "updated" or "exists". Raises BootstrapError when no
    password is supplied. Must run inside an application context.
    """
    if not admin_password:
        raise BootstrapError("ADMIN_PASSWORD not set")

    admin_email = normalize_email(admin_email or DEFAULT_ADMIN_EMAIL)
    existing_admin = AdminRepository.find_by_email(admin_email)

    if existing_admin:
        if not update:
            logger.info(f"Admin account already exists for: {admin_email}")
            return "exists"
        existing_admin.password = admin_password
        existing_admin.is_active = True
        AdminRepository.save(existing_admin)
        logger.info(f"Admin account updated: {admin_email}")
        return "updated"

    admin = Admin(email=admin_email, role=AdminRole.SUPERADMIN, is_active=True)
    admin.password = admin_password
    AdminRepository.create(admin)
    logger.info(f"Created bootstrap admin: {admin_email}")
    return "created"
