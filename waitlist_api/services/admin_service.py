import csv
import io
import logging
from datetime import date, timedelta

from sqlalchemy.exc import SQLAlchemyError

from waitlist_api.extensions import db
from waitlist_api.exceptions import InternalError, NotFoundError
from waitlist_api.models.enums import WaitlistStatus
from waitlist_api.models.timestamps import (
    isoformat,
    local_midnight,
    local_month_start,
    utcnow,
)
from waitlist_api.repositories import WaitlistRepository
from waitlist_api.services.waitlist_service import paginate
from waitlist_api.utils import email as email_utils

logger = logging.getLogger(__name__)

CSV_HEADER = ["Email", "Status", "Signup Date", "Confirmed Date", "IP Address"]
GROWTH_TREND_DAYS = 7
LATEST_SIGNUPS = 5


class AdminService:
    @staticmethod
    def stats():
        try:
            overview = {
                "total": WaitlistRepository.count_active(),
                "confirmed": WaitlistRepository.count_by_status(WaitlistStatus.CONFIRMED),
                "pending": WaitlistRepository.count_by_status(WaitlistStatus.PENDING),
                "unsubscribed": WaitlistRepository.count_by_status(
                    WaitlistStatus.UNSUBSCRIBED
                ),
            }

            time_stats = {
                "today": WaitlistRepository.count_active(created_from=local_midnight()),
                "thisWeek": WaitlistRepository.count_active(
                    created_from=utcnow() - timedelta(days=7)
                ),
                "thisMonth": WaitlistRepository.count_active(
                    created_from=local_month_start()
                ),
            }

            latest = WaitlistRepository.newest_first(
                WaitlistRepository.active_query()
            ).limit(LATEST_SIGNUPS)

            return {
                "overview": overview,
                "timeStats": time_stats,
                "growthTrend": AdminService.growth_trend(),
                "latestSignups": [entry.to_summary() for entry in latest],
            }
        except SQLAlchemyError as e:
            logger.error(f"Error getting admin stats: {str(e)}")
            raise InternalError("Failed to get statistics") from e

    @staticmethod
    def growth_trend(days=GROWTH_TREND_DAYS):
        """Daily signup counts for the last `days` local days, oldest first."""
        trend = []
        for days_ago in range(days - 1, -1, -1):
            count = WaitlistRepository.count_active(
                created_from=local_midnight(days_ago),
                created_before=local_midnight(days_ago - 1),
            )
            day = date.today() - timedelta(days=days_ago)
            trend.append({"date": day.isoformat(), "count": count})
        return trend

    @staticmethod
    def list_entries(page=1, limit=20, status=None, search=None):
        try:
            query = WaitlistRepository.filtered_query(status=status, search=search)
            return paginate(query, page, limit)
        except SQLAlchemyError as e:
            logger.error(f"Error getting entries: {str(e)}")
            raise InternalError("Failed to get entries") from e

    @staticmethod
    def export_csv(status=None):
        try:
            query = WaitlistRepository.filtered_query(status=status)
            entries = WaitlistRepository.newest_first(query).all()
        except SQLAlchemyError as e:
            logger.error(f"Error exporting to CSV: {str(e)}")
            raise InternalError("Failed to export data") from e

        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(CSV_HEADER)
        for entry in entries:
            writer.writerow(
                [
                    entry.email,
                    entry.status.value,
                    isoformat(entry.created_at),
                    isoformat(entry.confirmed_at) or "N/A",
                    entry.ip_address or "N/A",
                ]
            )

        logger.info(f"Exported {len(entries)} waitlist entries")
        return buffer.getvalue()

    @staticmethod
    def _get_entry(entry_id):
        entry = WaitlistRepository.find_by_id(entry_id)
        if not entry:
            raise NotFoundError("Entry not found")
        return entry

    @staticmethod
    def delete_entry(entry_id):
        try:
            entry = AdminService._get_entry(entry_id)
            email = entry.email
            WaitlistRepository.delete(entry)
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Error deleting entry {entry_id}: {str(e)}")
            raise InternalError("Failed to delete entry") from e

        logger.info(f"Deleted waitlist entry {entry_id} ({email})")
        return {"message": "Entry deleted successfully"}

    @staticmethod
    def resend_welcome(entry_id):
        """Send the welcome email again. Unlike join, transport errors propagate."""
        entry = AdminService._get_entry(entry_id)
        delivery = email_utils.send_welcome_email(entry.email)
        return {"message": f"Welcome email sent to {entry.email}", "delivery": delivery}
