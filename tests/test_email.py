import smtplib

import pytest

from waitlist_api.exceptions import TransientDependencyError
from waitlist_api.extensions import mail
from waitlist_api.utils import email as email_utils


def test_connection_check_succeeds_with_suppressed_transport(app):
    assert email_utils.test_connection() == {
        "success": True,
        "message": "Email server is ready",
    }


def test_connection_check_reports_unconfigured_transport(app):
    app.config["MAIL_SERVER"] = None
    app.config["MAIL_SUPPRESS_SEND"] = False

    result = email_utils.test_connection()

    assert result["success"] is False
    assert "not configured" in result["error"]


def test_connection_check_reports_transport_errors(app, monkeypatch):
    def refuse():
        raise ConnectionRefusedError("connection refused")

    monkeypatch.setattr(mail, "connect", refuse)

    result = email_utils.test_connection()

    assert result == {"success": False, "error": "connection refused"}


def test_send_welcome_returns_delivery_metadata(app):
    with mail.record_messages() as outbox:
        delivery = email_utils.send_welcome_email("hello@example.com")

    assert delivery["recipients"] == ["hello@example.com"]
    assert delivery["subject"] == outbox[0].subject
    assert "MindCare" in delivery["subject"]
    assert "https://waitlist.example.com" in outbox[0].html


def test_send_welcome_without_transport_raises(app):
    app.config["MAIL_SERVER"] = None
    app.config["MAIL_SUPPRESS_SEND"] = False

    with pytest.raises(TransientDependencyError):
        email_utils.send_welcome_email("hello@example.com")


def test_send_welcome_wraps_smtp_errors(app, monkeypatch):
    def broken_send(message):
        raise smtplib.SMTPAuthenticationError(535, b"bad credentials")

    monkeypatch.setattr(mail, "send", broken_send)

    with pytest.raises(TransientDependencyError) as excinfo:
        email_utils.send_welcome_email("hello@example.com")
    assert isinstance(excinfo.value.__cause__, smtplib.SMTPAuthenticationError)


def test_admin_notification_goes_to_configured_address(app):
    app.config["ADMIN_NOTIFY_EMAIL"] = "owner@example.com"

    with mail.record_messages() as outbox:
        result = email_utils.send_admin_notification("new@example.com")

    assert result["success"] is True
    assert outbox[0].recipients == ["owner@example.com"]
    assert "new@example.com" in outbox[0].body


def test_admin_notification_never_raises(app, monkeypatch):
    app.config["ADMIN_NOTIFY_EMAIL"] = "owner@example.com"

    def broken_send(message):
        raise smtplib.SMTPServerDisconnected("gone")

    monkeypatch.setattr(mail, "send", broken_send)

    result = email_utils.send_admin_notification("new@example.com")

    assert result == {"success": False, "error": "gone"}


def test_admin_notification_skipped_without_recipient(app):
    result = email_utils.send_admin_notification("new@example.com")

    assert result == {"success": False, "skipped": True}


def test_admin_notification_ignores_smtp_username(app):
    app.config["MAIL_USERNAME"] = "smtp-user@example.com"

    with mail.record_messages() as outbox:
        result = email_utils.send_admin_notification("new@example.com")

    assert result == {"success": False, "skipped": True}
    assert outbox == []
