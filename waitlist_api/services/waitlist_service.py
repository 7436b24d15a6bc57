import logging
import math

from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from waitlist_api.extensions import db
from waitlist_api.exceptions import (
    InternalError,
    NotFoundError,
    TransientDependencyError,
)
from waitlist_api.models import WaitlistEntry
from waitlist_api.models.enums import WaitlistStatus
from waitlist_api.models.timestamps import local_midnight, utcnow
from waitlist_api.repositories import WaitlistRepository
from waitlist_api.utils import email as email_utils
from waitlist_api.utils.validators import normalize_email

logger = logging.getLogger(__name__)

ALREADY_ON_WAITLIST = "You're already on the waitlist!"
REACTIVATED = "Welcome back! You've been added to the waitlist again."
JOINED_EMAIL_SENT = "Successfully added to waitlist! Check your email for confirmation."
JOINED = "Successfully added to waitlist!"


def paginate(query, page, limit):
    total = query.count()
    entries = WaitlistRepository.paginate(query, page, limit)
    return {
        "entries": [entry.to_dict() for entry in entries],
        "pagination": {
            "page": page,
            "limit": limit,
            "total": total,
            "pages": math.ceil(total / limit),
        },
    }


class WaitlistService:
    @staticmethod
    def _try_send_welcome(email):
        """Send the welcome email; failures are logged and reported as False."""
        try:
            email_utils.send_welcome_email(email)
            return True
        except TransientDependencyError as e:
            logger.warning(f"Welcome email not sent to {email}: {e.message}")
            return False

    @staticmethod
    def join(email, referral_source=None, ip_address=None, user_agent=None):
        """Add an email to the waitlist.

        Returns a dict with ``created`` (whether a new entry was inserted),
        ``message`` and ``data``.
        """
        email = normalize_email(email)
        logger.info(f"Waitlist signup attempt: {email}")

        try:
            existing_entry = WaitlistRepository.find_by_email(email)
            if existing_entry:
                return WaitlistService._handle_existing(existing_entry)

            now = utcnow()
            entry = WaitlistEntry(
                email=email,
                ip_address=ip_address,
                user_agent=user_agent,
                referral_source=referral_source,
                # Auto-confirm: no verification token is checked anywhere
                status=WaitlistStatus.CONFIRMED,
                confirmed_at=now,
                created_at=now,
            )
            try:
                WaitlistRepository.create(entry)
            except IntegrityError:
                # Lost a race with a concurrent join for the same email
                db.session.rollback()
                logger.info(f"Concurrent signup detected for {email}")
                return {
                    "created": False,
                    "message": ALREADY_ON_WAITLIST,
                    "data": {"email": email},
                }
            logger.info(f"Waitlist entry created: {email}")

            email_sent = WaitlistService._try_send_welcome(email)
            if current_app.config.get("ADMIN_NOTIFY_EMAIL"):
                email_utils.notify_admin_async(email)

            position = WaitlistRepository.count_active(created_until=entry.created_at)
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Database error adding {email} to waitlist: {str(e)}")
            raise InternalError("Failed to join waitlist. Please try again.") from e

        return {
            "created": True,
            "message": JOINED_EMAIL_SENT if email_sent else JOINED,
            "data": {"email": entry.email, "position": position, "emailSent": email_sent},
        }

    @staticmethod
    def _handle_existing(entry):
        if entry.status == WaitlistStatus.UNSUBSCRIBED:
            entry.status = WaitlistStatus.PENDING
            entry.confirmed_at = None
            WaitlistRepository.save(entry)
            logger.info(f"Waitlist entry reactivated: {entry.email}")

            if WaitlistService._try_send_welcome(entry.email):
                logger.info(f"Reactivation email sent to {entry.email}")
            return {
                "created": False,
                "message": REACTIVATED,
                "data": {"email": entry.email},
            }

        logger.info(f"Email already exists in waitlist: {entry.email}")
        return {
            "created": False,
            "message": ALREADY_ON_WAITLIST,
            "data": {"email": entry.email},
        }

    @staticmethod
    def stats():
        try:
            return {
                "total": WaitlistRepository.count_active(),
                "confirmed": WaitlistRepository.count_by_status(WaitlistStatus.CONFIRMED),
                "today": WaitlistRepository.count_active(created_from=local_midnight()),
            }
        except SQLAlchemyError as e:
            logger.error(f"Error getting waitlist stats: {str(e)}")
            raise InternalError("Failed to get statistics") from e

    @staticmethod
    def list_all(page=1, limit=50):
        try:
            return paginate(WaitlistRepository.active_query(), page, limit)
        except SQLAlchemyError as e:
            logger.error(f"Error getting waitlist entries: {str(e)}")
            raise InternalError("Failed to get waitlist entries") from e

    @staticmethod
    def unsubscribe(email):
        email = normalize_email(email)
        try:
            entry = WaitlistRepository.find_by_email(email)
            if not entry:
                raise NotFoundError("Email not found in waitlist")

            entry.status = WaitlistStatus.UNSUBSCRIBED
            WaitlistRepository.save(entry)
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Error unsubscribing {email}: {str(e)}")
            raise InternalError("Failed to unsubscribe") from e

        logger.info(f"Unsubscribed from waitlist: {email}")
        return {"message": "Successfully unsubscribed from waitlist"}

    @staticmethod
    def confirm(token):
        # Placeholder: entries are auto-confirmed on join and no confirmation
        # token is ever issued, so there is nothing to look up.
        logger.info("Confirmation endpoint called")
        return {"message": "Email confirmed successfully!"}
