from waitlist_api.extensions import db
from .enums import WaitlistStatus
from .timestamps import utcnow, isoformat


class WaitlistEntry(db.Model):
    __tablename__ = "waitlist_entries"

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), nullable=False)
    ip_address = db.Column(db.String(64), nullable=True)
    user_agent = db.Column(db.Text, nullable=True)
    referral_source = db.Column(db.Text, nullable=True)
    status = db.Column(
        db.Enum(
            WaitlistStatus,
            name="waitliststatus",
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=WaitlistStatus.PENDING,
    )
    confirmed_at = db.Column(db.DateTime, nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow, index=True)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    # The only guard against two concurrent joins inserting the same email
    __table_args__ = (db.UniqueConstraint("email", name="uq_waitlist_email"),)

    def to_dict(self):
        return {
            "id": self.id,
            "email": self.email,
            "ipAddress": self.ip_address,
            "userAgent": self.user_agent,
            "referralSource": self.referral_source,
            "status": self.status.value if self.status else None,
            "confirmedAt": isoformat(self.confirmed_at),
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }

    def to_summary(self):
        return {
            "email": self.email,
            "createdAt": isoformat(self.created_at),
            "status": self.status.value,
        }

    def __repr__(self):
        return f"<WaitlistEntry email={self.email} status={self.status}>"
