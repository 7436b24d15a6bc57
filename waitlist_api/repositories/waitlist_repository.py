from waitlist_api.extensions import db
from waitlist_api.models.waitlist_entry import WaitlistEntry
from waitlist_api.models.enums import WaitlistStatus
from typing import List, Optional


class WaitlistRepository:
    @staticmethod
    def create(entry: WaitlistEntry) -> WaitlistEntry:
        """Inserts a new entry. Raises IntegrityError if the email already exists."""
        db.session.add(entry)
        db.session.commit()
        return entry

    @staticmethod
    def save(entry: WaitlistEntry) -> WaitlistEntry:
        db.session.add(entry)
        db.session.commit()
        return entry

    @staticmethod
    def find_by_email(email: str) -> Optional[WaitlistEntry]:
        return WaitlistEntry.query.filter_by(email=email).first()

    @staticmethod
    def find_by_id(entry_id: int) -> Optional[WaitlistEntry]:
        return db.session.get(WaitlistEntry, entry_id)

    @staticmethod
    def delete(entry: WaitlistEntry) -> None:
        db.session.delete(entry)
        db.session.commit()

    @staticmethod
    def active_query():
        """Entries that have not unsubscribed."""
        return WaitlistEntry.query.filter(
            WaitlistEntry.status != WaitlistStatus.UNSUBSCRIBED
        )

    @staticmethod
    def filtered_query(status: Optional[WaitlistStatus] = None, search: Optional[str] = None):
        query = WaitlistEntry.query
        if status is not None:
            query = query.filter(WaitlistEntry.status == status)
        if search:
            escaped = (
                search.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
            )
            query = query.filter(WaitlistEntry.email.ilike(f"%{escaped}%", escape="\\"))
        return query

    @staticmethod
    def count_by_status(status: WaitlistStatus) -> int:
        return WaitlistEntry.query.filter(WaitlistEntry.status == status).count()

    @staticmethod
    def count_active(created_from=None, created_before=None, created_until=None) -> int:
        """Counts non-unsubscribed entries, optionally bounded by creation time.

        `created_before` is exclusive, `created_until` inclusive.
        """
        query = WaitlistRepository.active_query()
        if created_from is not None:
            query = query.filter(WaitlistEntry.created_at >= created_from)
        if created_before is not None:
            query = query.filter(WaitlistEntry.created_at < created_before)
        if created_until is not None:
            query = query.filter(WaitlistEntry.created_at <= created_until)
        return query.count()

    @staticmethod
    def newest_first(query):
        return query.order_by(WaitlistEntry.created_at.desc(), WaitlistEntry.id.desc())

    @staticmethod
    def paginate(query, page: int, limit: int) -> List[WaitlistEntry]:
        return (
            WaitlistRepository.newest_first(query)
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
