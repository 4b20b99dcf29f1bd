from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from projectcode import crud
from projectcode.api.deps import get_current_user, get_db
from projectcode.main import app
from projectcode.models import UserProfile


@pytest.fixture()
def user(session: Session) -> UserProfile:
    return crud.create_user_profile(session=session, uid="user-1", email="learner@example.com")


@pytest.fixture()
def admin(session: Session) -> UserProfile:
    return crud.seed_admin_profile(session=session, uid="admin-1", email="admin@example.com")


def _client_as(session: Session, profile: UserProfile) -> Generator[TestClient, None, None]:
    app.dependency_overrides[get_db] = lambda: session
    app.dependency_overrides[get_current_user] = lambda: profile
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def client(session: Session, user: UserProfile) -> Generator[TestClient, None, None]:
    yield from _client_as(session, user)


@pytest.fixture()
def admin_client(session: Session, admin: UserProfile) -> Generator[TestClient, None, None]:
    yield from _client_as(session, admin)
