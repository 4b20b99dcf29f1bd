import argparse
import logging
import os
import sys

import firebase_admin
from firebase_admin import auth, exceptions as firebase_exceptions
from sqlmodel import Session

from projectcode import crud
from projectcode.core.db import engine, init_db
from projectcode.core.security import get_firebase_app
from projectcode.models import UserProfile

logger = logging.getLogger(__name__)


def resolve_auth_user(
    *,
    email: str,
    password: str | None = None,
    display_name: str = "Admin User",
    uid: str | None = None,
    app: firebase_admin.App | None = None,
) -> auth.UserRecord:
    """
    Find the account to promote, creating it when it does not exist yet.

    With a uid the account must already exist. Otherwise the account is looked
    up by email and created (which needs a password) when missing.
    """
    if uid:
        try:
            record = auth.get_user(uid, app=app)
        except auth.UserNotFoundError as e:
            raise ValueError(f"User with UID {uid} not found in Firebase Auth") from e
        logger.info("Found existing user with UID: %s", uid)
        return record

    try:
        record = auth.get_user_by_email(email, app=app)
        logger.info("Found existing user with email: %s (UID: %s)", email, record.uid)
        return record
    except auth.UserNotFoundError:
        if not password:
            raise ValueError("Password is required to create a new user")

    record = auth.create_user(
        email=email,
        password=password,
        email_verified=True,
        display_name=display_name,
        app=app,
    )
    logger.info("Created new admin user: %s (UID: %s)", email, record.uid)
    return record


def seed_admin(
    session: Session,
    *,
    email: str,
    password: str | None = None,
    display_name: str = "Admin User",
    uid: str | None = None,
    app: firebase_admin.App | None = None,
) -> UserProfile:
    record = resolve_auth_user(email=email, password=password, display_name=display_name, uid=uid, app=app)
    profile = crud.seed_admin_profile(session=session, uid=record.uid, email=record.email)
    logger.info("Seeded admin %s (UID: %s, roles: %s)", profile.email, profile.uid, ", ".join(profile.roles))
    return profile


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create or promote an administrator account.")
    parser.add_argument("--email", default=os.environ.get("ADMIN_EMAIL") or "admin@example.com")
    parser.add_argument("--password", default=os.environ.get("ADMIN_PASSWORD") or None)
    parser.add_argument("--uid", default=None, help="Promote an existing user by UID")
    parser.add_argument("--name", default="Admin User", help="Display name for a newly created user")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    try:
        app = get_firebase_app()
        with Session(engine) as session:
            init_db(session)
            seed_admin(
                session,
                email=args.email,
                password=args.password,
                display_name=args.name,
                uid=args.uid,
                app=app,
            )
    except (ValueError, firebase_exceptions.FirebaseError) as e:
        logger.error("Failed to seed admin user: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
