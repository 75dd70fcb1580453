"""Module: create_admin.

Bootstrap the first platform admin:

    python -m vetcare.scripts.create_admin admin@example.com 's3cret-pass'
"""

import argparse
import sys

from sqlalchemy import func, select

from vetcare.core.security import hash_password
from vetcare.db.init_db import init_db
from vetcare.db.models.user import User, UserRole
from vetcare.db.session import SessionLocal
from vetcare.schemas.user import MIN_PASSWORD_LENGTH


def create_admin(session, email: str, password: str, first_name: str | None = None, last_name: str | None = None) -> User:
    email = email.strip().lower()
    if session.execute(select(User.user_id).where(func.lower(User.email) == email)).first():
        raise ValueError(f"User {email} already exists")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

    user = User(
        email=email,
        password=hash_password(password),
        first_name=first_name,
        last_name=last_name,
        role=UserRole.ADMIN,
        clinic_id=None,
        is_active=True,
    )
    session.add(user)
    session.commit()
    return user


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a platform admin user")
    parser.add_argument("email")
    parser.add_argument("password")
    parser.add_argument("--first-name", default=None)
    parser.add_argument("--last-name", default=None)
    args = parser.parse_args(argv)

    init_db()
    session = SessionLocal()
    try:
        user = create_admin(session, args.email, args.password, args.first_name, args.last_name)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    finally:
        session.close()

    print(f"Created admin {user.email} ({user.user_id})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
