"""
Create a user (e.g. the first admin). Run from project root:
  python -m app.scripts.create_user NAME EMAIL PASSWORD [role]
Example:
  python -m app.scripts.create_user "Ann Admin" ann@example.com your-secure-password admin
"""
import argparse
import re
import sys

from app.core.database import SessionLocal
from app.core.errors import ValidationFailureError
from app.core.security import NAME_MAX_LEN, PASSWORD_MAX_LEN, PASSWORD_MIN_LEN
from app.models.user import ROLE_USER, ROLES
from app.schemas.common import EMAIL_PATTERN
from app.services import accounts


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Quillpost user.")
    parser.add_argument("name", help=f"Display name (1-{NAME_MAX_LEN} chars)")
    parser.add_argument("email", help="Email address (unique)")
    parser.add_argument(
        "password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)"
    )
    parser.add_argument("role", nargs="?", default=ROLE_USER, choices=ROLES)
    args = parser.parse_args(argv)

    name = args.name.strip()
    if not name or len(name) > NAME_MAX_LEN:
        print("Invalid name length.", file=sys.stderr)
        return 1
    if not re.match(EMAIL_PATTERN, args.email.strip()):
        print("Invalid email address.", file=sys.stderr)
        return 1
    if not PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN:
        print(
            f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.",
            file=sys.stderr,
        )
        return 1

    db = SessionLocal()
    try:
        try:
            user = accounts.register(db, name, args.email, args.password)
        except ValidationFailureError as e:
            print(e.message, file=sys.stderr)
            return 1
        if args.role != ROLE_USER:
            user = accounts.set_role(db, user, user, args.role)
        print(f"Created user '{user.email}' with role '{user.role}'.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
