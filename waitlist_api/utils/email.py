import smtplib
from datetime import datetime
from threading import Thread
from urllib.parse import quote

from flask import current_app, render_template
from flask_mail import Message

from waitlist_api.extensions import mail
from waitlist_api.exceptions import TransientDependencyError

WELCOME_SUBJECT = "🎉 Welcome to {app_name} - You're on the List!"
ADMIN_NOTIFICATION_SUBJECT = "🎊 New Waitlist Signup - {app_name}"

# Errors raised by smtplib and the sockets underneath it
TRANSPORT_ERRORS = (smtplib.SMTPException, OSError)


def _sender(app):
    if app.config.get("MAIL_DEFAULT_SENDER"):
        return app.config["MAIL_DEFAULT_SENDER"]
    if app.config.get("MAIL_USERNAME"):
        return (app.config.get("APP_NAME"), app.config["MAIL_USERNAME"])
    return None


def _transport_configured(app):
    if _sender(app) is None:
        return False
    return bool(app.config.get("MAIL_SUPPRESS_SEND") or app.config.get("MAIL_SERVER"))


def test_connection():
    """Open and authenticate an SMTP connection, then close it.

    Nothing is sent. Returns a dict with ``success`` and either ``message``
    or ``error``.
    """
    app = current_app._get_current_object()
    if not _transport_configured(app):
        app.logger.error("Missing email configuration (MAIL_SERVER / sender)")
        return {"success": False, "error": "Email transport is not configured"}

    try:
        with mail.connect():
            pass
    except TRANSPORT_ERRORS as e:
        app.logger.error(f"Email server connection failed: {e}")
        return {"success": False, "error": str(e)}

    app.logger.info("Email server connection verified")
    return {"success": True, "message": "Email server is ready"}


def _welcome_context(app, email):
    frontend_url = app.config.get("FRONTEND_URL", "").rstrip("/")
    return {
        "app_name": app.config.get("APP_NAME"),
        "frontend_url": frontend_url,
        "unsubscribe_url": f"{frontend_url}/unsubscribe?email={quote(email)}",
        "email": email,
        "current_year": datetime.now().year,
    }


def send_welcome_email(email):
    """Render and send the welcome email synchronously.

    Returns delivery metadata. Raises TransientDependencyError when the
    transport is not configured or the send fails; callers decide whether
    that is fatal.
    """
    app = current_app._get_current_object()
    if not _transport_configured(app):
        raise TransientDependencyError("Email transport is not configured")

    context = _welcome_context(app, email)
    msg = Message(
        WELCOME_SUBJECT.format(app_name=context["app_name"]),
        sender=_sender(app),
        recipients=[email],
    )
    msg.html = render_template("email/welcome.html", **context)
    msg.body = render_template("email/welcome.txt", **context)

    # In testing mode, log the email as well as handing it to the suppressed transport
    if app.testing:
        app.logger.info("--- MOCK WELCOME EMAIL ---")
        app.logger.info(f"To: {email}")
        app.logger.info(f"Subject: {msg.subject}")
        app.logger.info(f"Unsubscribe URL: {context['unsubscribe_url']}")
        app.logger.info("--- END MOCK WELCOME EMAIL ---")

    app.logger.info(f"Attempting to send welcome email to: {email}")
    try:
        mail.send(msg)
    except TRANSPORT_ERRORS as e:
        app.logger.error(f"Error sending welcome email to {email}: {e}")
        raise TransientDependencyError("Failed to send welcome email") from e

    app.logger.info(f"Welcome email sent to {email}")
    return {
        "messageId": getattr(msg, "msgId", None),
        "recipients": list(msg.recipients),
        "subject": msg.subject,
    }


def send_admin_notification(email):
    """Tell the configured admin address about a new signup. Never raises."""
    app = current_app._get_current_object()
    recipient = app.config.get("ADMIN_NOTIFY_EMAIL")
    if not recipient or not _transport_configured(app):
        app.logger.info("Admin notification skipped, no recipient or transport configured")
        return {"success": False, "skipped": True}

    signed_up_at = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    msg = Message(
        ADMIN_NOTIFICATION_SUBJECT.format(app_name=app.config.get("APP_NAME")),
        sender=_sender(app),
        recipients=[recipient],
    )
    msg.html = (
        "<h2>New Waitlist Signup!</h2>"
        f"<p><strong>Email:</strong> {email}</p>"
        f"<p><strong>Time:</strong> {signed_up_at}</p>"
    )
    msg.body = f"New Waitlist Signup!\n\nEmail: {email}\nTime: {signed_up_at}"

    try:
        mail.send(msg)
    except Exception as e:
        app.logger.error(f"Error sending admin notification for {email}: {e}")
        return {"success": False, "error": str(e)}

    app.logger.info(f"Admin notification sent for {email}")
    return {"success": True, "messageId": getattr(msg, "msgId", None)}


def _send_admin_notification_in_context(app, email):
    with app.app_context():
        send_admin_notification(email)


def notify_admin_async(email):
    app = current_app._get_current_object()
    Thread(target=_send_admin_notification_in_context, args=(app, email)).start()
