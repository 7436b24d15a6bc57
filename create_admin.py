import argparse
import os
import sys
from dotenv import load_dotenv
from waitlist_api import create_app, db
from waitlist_api.bootstrap import BootstrapError, create_bootstrap_admin
from waitlist_api.exceptions import ValidationError


def main(argv=None):
    load_dotenv()

    parser = argparse.ArgumentParser(description="Create the bootstrap admin account")
    parser.add_argument(
        "--update",
        action="store_true",
        help="reset the password and reactivate the account if it already exists",
    )
    args = parser.parse_args(argv)

    if not os.getenv("DATABASE_URL"):
        print("ERROR: DATABASE_URL not set in .env file")
        return 1

    admin_email = os.getenv("ADMIN_EMAIL")
    admin_password = os.getenv("ADMIN_PASSWORD")

    app = create_app()
    with app.app_context():
        db.create_all()
        try:
            result = create_bootstrap_admin(admin_email, admin_password, update=args.update)
        except (BootstrapError, ValidationError) as e:
            print(f"ERROR: {e}")
            return 1

    if result == "exists":
        print("Admin account already exists! Run with --update to reset its password.")
    elif result == "updated":
        print("Admin account updated successfully!")
    else:
        print("Admin account created successfully! (role: superadmin)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
