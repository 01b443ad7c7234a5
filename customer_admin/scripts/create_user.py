"""
Create an account (e.g. the first admin). Run from project root:
  python -m customer_admin.scripts.create_user USERNAME PASSWORD [role]
Example:
  python -m customer_admin.scripts.create_user admin your-secure-password admin
"""
import argparse
import sys

from sqlalchemy import select

from customer_admin.core.config import get_settings
from customer_admin.core.database import create_db_engine, create_session_factory
from customer_admin.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
    hash_password,
)
from customer_admin.models import User
from customer_admin.schemas.auth import Role


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Create a login account (accounts are never created over HTTP)."
    )
    parser.add_argument("username", help=f"Username ({USERNAME_MIN_LEN}-{USERNAME_MAX_LEN} chars)")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument(
        "role",
        nargs="?",
        default=Role.USER.value,
        choices=[r.value for r in Role],
    )
    return parser


def main(argv: list[str] | None = None, session_factory=None) -> int:
    args = build_parser().parse_args(argv)

    username = args.username.strip()
    if not (USERNAME_MIN_LEN <= len(username) <= USERNAME_MAX_LEN):
        print("Invalid username length.", file=sys.stderr)
        return 1
    if not (PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN):
        print(
            f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.",
            file=sys.stderr,
        )
        return 1

    engine = None
    if session_factory is None:
        engine = create_db_engine(get_settings())
        session_factory = create_session_factory(engine)

    db = session_factory()
    try:
        existing = db.scalars(select(User).where(User.username == username)).first()
        if existing:
            print(f"User '{username}' already exists.", file=sys.stderr)
            return 1
        user = User(
            username=username,
            password_hash=hash_password(args.password),
            role=args.role,
        )
        db.add(user)
        db.commit()
        print(f"Created user '{username}' with role '{args.role}'.")
        return 0
    finally:
        db.close()
        if engine is not None:
            engine.dispose()


if __name__ == "__main__":
    sys.exit(main())
