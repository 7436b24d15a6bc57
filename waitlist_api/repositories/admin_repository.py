from waitlist_api.extensions import db
from waitlist_api.models.admin import Admin
from typing import Optional


class AdminRepository:
    @staticmethod
    def create(admin: Admin) -> Admin:
        db.session.add(admin)
        db.session.commit()
        return admin

    @staticmethod
    def save(admin: Admin) -> Admin:
        db.session.add(admin)
        db.session.commit()
        return admin

    @staticmethod
    def find_by_email(email: str) -> Optional[Admin]:
        return Admin.query.filter_by(email=email).first()
