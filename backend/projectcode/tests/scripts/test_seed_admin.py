from unittest.mock import MagicMock, patch

import pytest
from firebase_admin import auth

from projectcode import crud
from projectcode.scripts.seed_admin import seed_admin


def _record(uid: str, email: str) -> MagicMock:
    return MagicMock(uid=uid, email=email)


def test_existing_email_is_promoted(session):
    crud.create_user_profile(session=session, uid="fb-1", email="boss@example.com")

    with patch("projectcode.scripts.seed_admin.auth.get_user_by_email", return_value=_record("fb-1", "boss@example.com")):
        with patch("projectcode.scripts.seed_admin.auth.create_user") as create_user:
            profile = seed_admin(session, email="boss@example.com")

    create_user.assert_not_called()
    assert profile.roles == ["user", "admin"]
    assert profile.status == "active"


def test_unknown_email_creates_the_account(session):
    not_found = auth.UserNotFoundError("no user")
    with patch("projectcode.scripts.seed_admin.auth.get_user_by_email", side_effect=not_found):
        with patch(
            "projectcode.scripts.seed_admin.auth.create_user", return_value=_record("fb-2", "new@example.com")
        ) as create_user:
            profile = seed_admin(session, email="new@example.com", password="pw123456", display_name="Ops")

    assert create_user.call_args.kwargs["email_verified"] is True
    assert create_user.call_args.kwargs["display_name"] == "Ops"
    assert profile.uid == "fb-2"
    assert "admin" in profile.roles


def test_creating_an_account_requires_a_password(session):
    with patch("projectcode.scripts.seed_admin.auth.get_user_by_email", side_effect=auth.UserNotFoundError("no user")):
        with pytest.raises(ValueError, match="Password is required"):
            seed_admin(session, email="new@example.com")


def test_unknown_uid_is_an_error(session):
    with patch("projectcode.scripts.seed_admin.auth.get_user", side_effect=auth.UserNotFoundError("no user")):
        with pytest.raises(ValueError, match="not found"):
            seed_admin(session, email="x@example.com", uid="missing")
