import logging
from collections.abc import Generator
from typing import Annotated

from fastapi import Depends, Header, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from firebase_admin import auth as firebase_auth
from sqlmodel import Session

from projectcode import crud
from projectcode.core import security
from projectcode.core.config import settings
from projectcode.core.db import engine
from projectcode.models import UserProfile

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_db() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


SessionDep = Annotated[Session, Depends(get_db)]
TokenDep = Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)]


def get_current_user(session: SessionDep, token: TokenDep) -> UserProfile:
    if token is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    try:
        decoded = security.verify_id_token(token.credentials)
    except firebase_auth.CertificateFetchError as e:
        logger.error("Could not fetch ID token signing keys: %s", e)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Authentication service unavailable",
        ) from e
    except (ValueError, firebase_auth.InvalidIdTokenError) as e:
        logger.info("Rejected ID token: %s", e)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        ) from e

    uid = decoded["uid"]
    user = crud.get_user_profile(session=session, uid=uid)
    if not user:
        user = crud.create_user_profile(session=session, uid=uid, email=decoded.get("email"))
        logger.info("Created profile for new user %s", uid)
    if user.status == "blocked":
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="User is blocked")
    return user


CurrentUser = Annotated[UserProfile, Depends(get_current_user)]


def get_current_admin(current_user: CurrentUser) -> UserProfile:
    if "admin" not in (current_user.roles or []):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="The user doesn't have enough privileges")
    return current_user


CurrentAdmin = Annotated[UserProfile, Depends(get_current_admin)]


def get_model_api_key(
    x_gemini_api_key: Annotated[str | None, Header()] = None,
) -> str | None:
    # Resolution only; an absent key is rejected by the flow itself.
    return x_gemini_api_key or settings.GEMINI_API_KEY


ApiKeyDep = Annotated[str | None, Depends(get_model_api_key)]
