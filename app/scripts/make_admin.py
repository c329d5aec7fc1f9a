"""
Promote an existing user to administrator. Run from project root:
  python -m app.scripts.make_admin ann@example.com

The user must log in again; the role is read from the database on each
request, so the new token is not strictly needed, but the client's cached
profile will still show the old role until then.
"""
import argparse
import logging
import sys

from app.core.database import SessionLocal
from app.models.user import ROLE_ADMIN
from app.services import accounts

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s %(message)s")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Grant the admin role to a user.")
    parser.add_argument("email", help="Email of an existing account")
    args = parser.parse_args(argv)

    db = SessionLocal()
    try:
        user = accounts.get_user_by_email(db, args.email)
        if user is None:
            print(f"User with email '{args.email}' not found.", file=sys.stderr)
            return 1
        if user.role == ROLE_ADMIN:
            print(f"User '{user.email}' is already an admin.")
            return 0
        accounts.set_role(db, user, user, ROLE_ADMIN)
        print(f"User '{user.email}' is now an admin. Log in again to refresh the client.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
