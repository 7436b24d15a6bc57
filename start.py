#!/usr/bin/env python3
import os
from dotenv import load_dotenv
from waitlist_api import create_app, db
from waitlist_api.utils import email as email_utils

# Load environment variables
load_dotenv()

# Create the Flask application
app = create_app()

# Create database tables if they don't exist and check the mail transport
with app.app_context():
    app.logger.info("Attempting to create database tables...")
    app.logger.info(f"Tables known to SQLAlchemy metadata before create_all: {list(db.metadata.tables.keys())}")
    db.create_all()
    app.logger.info("Database tables check/creation complete.")

    email_status = email_utils.test_connection()
    if not email_status["success"]:
        app.logger.warning(f"Email transport unavailable, welcome emails will be skipped: {email_status['error']}")

if __name__ == "__main__":
    port = int(os.environ.get("PORT", 5000))
    app.run(host="0.0.0.0", port=port, debug=app.config["ENV_NAME"] == "development")
