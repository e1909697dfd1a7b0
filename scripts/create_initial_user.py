"""Create a user that can log in to the simulator.

Imported vendor users have no password and cannot log in; create a local
user (optionally with an explicit ``--user-id``) before importing into it.
"""

from __future__ import annotations

import argparse
from getpass import getpass

from sqlalchemy.exc import SQLAlchemyError

from pfm_simulator.application.use_cases.users.create_user import create_user
from pfm_simulator.infrastructure.database import SessionLocal, initialize_database


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create a PFM simulator user.")
    parser.add_argument("--email", default="demo@example.com", help="Login email")
    parser.add_argument("--partner-id", type=int, default=1, help="Partner identifier")
    parser.add_argument("--user-id", type=int, default=None, help="Explicit user id")
    parser.add_argument("--first-name", default=None)
    parser.add_argument("--last-name", default=None)
    parser.add_argument(
        "--password",
        default=None,
        help="User password. Prompted for when omitted.",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()

    password = args.password or getpass("Password: ")
    if not password:
        raise SystemExit("A password is required.")

    initialize_database()

    session = SessionLocal()
    try:
        user = create_user(
            session,
            email=args.email,
            password=password,
            partner_id=args.partner_id,
            first_name=args.first_name,
            last_name=args.last_name,
            user_id=args.user_id,
        )
    except ValueError as exc:
        session.rollback()
        raise SystemExit(f"Could not create the user: {exc}") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Database error while saving the user: {exc}") from exc
    else:
        print(f"Created user {user.id} <{user.email}> for partner {user.partner_id}")
    finally:
        session.close()


if __name__ == "__main__":
    main()
