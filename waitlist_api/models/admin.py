from waitlist_api.extensions import db
from waitlist_api.utils.passwords import hash_password, verify_password
from .enums import AdminRole
from .timestamps import utcnow, isoformat


class Admin(db.Model):
    __tablename__ = "admins"

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    role = db.Column(
        db.Enum(
            AdminRole,
            name="adminrole",
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=AdminRole.ADMIN,
    )
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    last_login = db.Column(db.DateTime, nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    @property
    def password(self):
        raise AttributeError("password is write-only")

    @password.setter
    def password(self, plaintext):
        self.password_hash = hash_password(plaintext)

    def check_password(self, plaintext):
        return verify_password(plaintext, self.password_hash)

    def to_dict(self):
        return {
            "id": self.id,
            "email": self.email,
            "role": self.role.value,
            "isActive": self.is_active,
            "lastLogin": isoformat(self.last_login),
            "createdAt": isoformat(self.created_at),
        }

    def __repr__(self):
        return f"<Admin email={self.email} role={self.role}>"
