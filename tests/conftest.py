"""Pytest fixtures: a fresh app, in-memory database and limiter per test."""
from datetime import timedelta

import pytest

from waitlist_api import create_app
from waitlist_api.extensions import db, limiter
from waitlist_api.models import Admin, WaitlistEntry
from waitlist_api.models.enums import AdminRole, WaitlistStatus
from waitlist_api.models.timestamps import utcnow

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "correct-horse-battery-staple"

TEST_CONFIG = {
    "TESTING": True,
    "ENV_NAME": "testing",
    "SQLALCHEMY_DATABASE_URI": "sqlite:///:memory:",
    "JWT_SECRET_KEY": "test-secret-key-that-is-long-enough-for-hs256",
    "JWT_COOKIE_SECURE": False,
    "MAIL_SERVER": "localhost",
    "MAIL_SUPPRESS_SEND": True,
    "MAIL_DEFAULT_SENDER": "noreply@example.com",
    "ADMIN_NOTIFY_EMAIL": None,
    "FRONTEND_URL": "https://waitlist.example.com",
    "RATELIMIT_STORAGE_URI": "memory://",
}


@pytest.fixture
def app():
    app = create_app(TEST_CONFIG)
    with app.app_context():
        db.create_all()
        limiter.reset()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_entry(app):
    def _make_entry(email, status=WaitlistStatus.CONFIRMED, created_at=None, ip_address=None):
        created_at = created_at or utcnow()
        entry = WaitlistEntry(
            email=email,
            status=status,
            ip_address=ip_address,
            created_at=created_at,
            confirmed_at=created_at if status == WaitlistStatus.CONFIRMED else None,
        )
        db.session.add(entry)
        db.session.commit()
        return entry

    return _make_entry


@pytest.fixture
def admin(app):
    account = Admin(email=ADMIN_EMAIL, role=AdminRole.SUPERADMIN, is_active=True)
    account.password = ADMIN_PASSWORD
    db.session.add(account)
    db.session.commit()
    return account


@pytest.fixture
def auth_headers(app, admin):
    # Separate client so the login cookie does not leak into `client`
    response = app.test_client().post(
        "/api/admin/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD}
    )
    assert response.status_code == 200
    token = response.get_json()["data"]["token"]
    return {"Authorization": f"Bearer {token}"}


def fetch_entry(email):
    db.session.expire_all()
    return WaitlistEntry.query.filter_by(email=email).first()


def days_ago(days):
    return utcnow() - timedelta(days=days)
