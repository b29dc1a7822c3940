"""Utility script to create the first administrator account."""

from __future__ import annotations

import argparse
from getpass import getpass

from sqlalchemy.exc import SQLAlchemyError

from app.application.use_cases.users import create_admin
from app.domain.entities import Profile
from app.infrastructure.database import SessionLocal, initialize_database


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for admin creation."""

    parser = argparse.ArgumentParser(
        description="Create an initial administrator for the Campus API.",
    )
    parser.add_argument("--first-name", default="System", help="First name (default: System)")
    parser.add_argument("--last-name", default="Administrator", help="Last name")
    parser.add_argument(
        "--email",
        default="admin@college.edu",
        help="Login email (default: admin@college.edu)",
    )
    parser.add_argument(
        "--password",
        default=None,
        help="Account password. Prompted interactively when omitted.",
    )
    parser.add_argument(
        "--permission",
        action="append",
        dest="permissions",
        default=None,
        help="Permission granted to the admin; may be repeated.",
    )
    return parser.parse_args()


def main() -> None:
    """Create an admin using the provided command line arguments."""

    args = parse_args()

    password = args.password or getpass("Admin password: ")
    if not password:
        raise SystemExit("A password is required.")

    initialize_database()

    session = SessionLocal()
    try:
        user = create_admin(
            session,
            email=args.email,
            password=password,
            profile=Profile(first_name=args.first_name, last_name=args.last_name),
            permissions=args.permissions or ["all"],
        )
    except ValueError as exc:
        session.rollback()
        raise SystemExit(f"Could not create the admin: {exc}") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Database error while saving the admin: {exc}") from exc
    else:
        print(
            "Admin created:\n"
            f"  ID: {user.id}\n"
            f"  Name: {user.profile.full_name}\n"
            f"  Email: {user.email}\n"
            f"  Code: {user.details.admin_code}"
        )
    finally:
        session.close()


if __name__ == "__main__":
    main()
