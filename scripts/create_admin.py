"""Create the first admin account in the application's database.

Usage (from the repository root):
python scripts/create_admin.py --email admin@gmail.com --password secret --name Admin

Values not given on the command line fall back to ADMIN_EMAIL, ADMIN_PASSWORD
and ADMIN_NAME, then to an interactive prompt. Does nothing when an admin
account already exists.
"""

import argparse
import os
import sys
from getpass import getpass

# Ensure src is on path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))

from app.db import SessionLocal  # noqa: E402
from app.db.init_db import init_db  # noqa: E402
from app.models.user import User, UserRole  # noqa: E402
from app.utils.auth import create_user, get_user_by_email  # noqa: E402


def main() -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("--email", default=os.environ.get("ADMIN_EMAIL"))
    parser.add_argument("--password", default=os.environ.get("ADMIN_PASSWORD"))
    parser.add_argument("--name", default=os.environ.get("ADMIN_NAME", "Admin"))
    args = parser.parse_args()

    init_db()

    db = SessionLocal()
    try:
        existing = db.query(User).filter(User.role == UserRole.admin).first()
        if existing:
            print(f"Admin user already exists: {existing.email}")
            return 0

        email = args.email or input("email: ")
        if get_user_by_email(db, email):
            print(f"A non-admin account already uses {email}")
            return 1
        password = args.password or getpass("password: ")
        user = create_user(db, email, password, args.name, role=UserRole.admin)
        print(f"Created admin user: {user.email} (id={user.id})")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
