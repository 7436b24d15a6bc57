import pytest

from waitlist_api.bootstrap import BootstrapError, create_bootstrap_admin
from waitlist_api.extensions import db
from waitlist_api.models import Admin
from waitlist_api.models.enums import AdminRole


def test_creates_superadmin(app):
    assert create_bootstrap_admin("Boss@Example.com", "s3cret-pass") == "created"

    admin = Admin.query.filter_by(email="boss@example.com").one()
    assert admin.role == AdminRole.SUPERADMIN
    assert admin.is_active is True
    assert admin.check_password("s3cret-pass")


def test_existing_admin_is_left_alone(app):
    create_bootstrap_admin("boss@example.com", "first-password")

    assert create_bootstrap_admin("boss@example.com", "second-password") == "exists"
    assert Admin.query.one().check_password("first-password")


def test_update_resets_password_and_reactivates(app):
    create_bootstrap_admin("boss@example.com", "first-password")
    admin = Admin.query.one()
    admin.is_active = False
    db.session.commit()

    assert create_bootstrap_admin("boss@example.com", "second-password", update=True) == "updated"

    db.session.expire_all()
    admin = Admin.query.one()
    assert admin.is_active is True
    assert admin.check_password("second-password")


def test_missing_password_is_an_error(app):
    with pytest.raises(BootstrapError):
        create_bootstrap_admin("boss@example.com", None)
    assert Admin.query.count() == 0


def test_default_email_when_none_given(app):
    create_bootstrap_admin(None, "s3cret-pass")

    assert Admin.query.one().email == "admin@example.com"
