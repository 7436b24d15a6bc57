from flask import Flask
from flask_cors import CORS
from dotenv import load_dotenv
import os
from waitlist_api.extensions import db, migrate, jwt, limiter, mail
from waitlist_api.errors import register_error_handlers
from datetime import timedelta
import logging

# Load environment variables
load_dotenv()


def _env_flag(name, default):
    return os.getenv(name, default).lower() in ["true", "1", "t"]


def create_app(config_overrides=None):
    app = Flask(__name__)

    env_name = os.getenv("FLASK_ENV", "production")
    app.config["ENV_NAME"] = env_name
    app.config["TESTING"] = env_name == "testing"

    # Configure logging
    logging.basicConfig(level=logging.INFO)
    app.logger.setLevel(logging.INFO)

    # Configure database
    app.config["SQLALCHEMY_DATABASE_URI"] = os.getenv(
        "DATABASE_URL", "postgresql://localhost/waitlist"
    )
    app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False

    # Configure JWT (header or adminToken cookie)
    app.config["JWT_SECRET_KEY"] = os.getenv("JWT_SECRET_KEY", "change-me")
    app.config["JWT_ACCESS_TOKEN_EXPIRES"] = timedelta(hours=24)
    app.config["JWT_TOKEN_LOCATION"] = ["headers", "cookies"]
    app.config["JWT_HEADER_NAME"] = "Authorization"
    app.config["JWT_HEADER_TYPE"] = "Bearer"
    app.config["JWT_ACCESS_COOKIE_NAME"] = "adminToken"
    app.config["JWT_COOKIE_SECURE"] = env_name == "production"
    app.config["JWT_COOKIE_CSRF_PROTECT"] = False

    # Email configuration
    mail_port = int(os.getenv("MAIL_PORT", 587))
    app.config["MAIL_SERVER"] = os.getenv("MAIL_SERVER")
    app.config["MAIL_PORT"] = mail_port
    app.config["MAIL_USE_SSL"] = _env_flag("MAIL_USE_SSL", str(mail_port == 465))
    app.config["MAIL_USE_TLS"] = not app.config["MAIL_USE_SSL"] and _env_flag(
        "MAIL_USE_TLS", "true"
    )
    app.config["MAIL_USERNAME"] = os.getenv("MAIL_USERNAME")
    app.config["MAIL_PASSWORD"] = os.getenv("MAIL_PASSWORD")
    app.config["MAIL_DEFAULT_SENDER"] = os.getenv("MAIL_DEFAULT_SENDER")
    app.config["ADMIN_NOTIFY_EMAIL"] = os.getenv("ADMIN_NOTIFY_EMAIL")
    app.config["APP_NAME"] = os.getenv("APP_NAME", "MindCare")
    app.config["FRONTEND_URL"] = os.getenv("FRONTEND_URL", "http://localhost:5173")

    # Rate limiting (fixed window, per client address)
    app.config["RATELIMIT_STORAGE_URI"] = os.getenv("LIMITER_STORAGE_URL", "memory://")
    app.config["RATELIMIT_STRATEGY"] = "fixed-window"
    app.config["RATELIMIT_DEFAULT"] = os.getenv(
        "RATELIMIT_DEFAULT", "150 per minute;10000 per hour"
    )

    cors_origins = os.getenv("CORS_ORIGINS", app.config["FRONTEND_URL"]).split(",")

    if config_overrides:
        app.config.update(config_overrides)

    # Initialize Flask extensions
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    limiter.init_app(app)
    mail.init_app(app)

    # Register blueprints
    from waitlist_api.routes.health_routes import health_bp
    from waitlist_api.routes.waitlist_routes import waitlist_bp
    from waitlist_api.routes.admin_routes import admin_bp

    app.register_blueprint(health_bp, url_prefix="/api")
    app.register_blueprint(waitlist_bp, url_prefix="/api/waitlist")
    app.register_blueprint(admin_bp, url_prefix="/api/admin")

    register_error_handlers(app)

    # Set up CORS
    app.logger.info(f"Initializing CORS with origins: {cors_origins}")
    CORS(
        app,
        resources={r"/api/*": {"origins": cors_origins}},
        supports_credentials=True,
        methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept"],
        expose_headers=["Content-Type", "Content-Disposition"],
    )

    return app
