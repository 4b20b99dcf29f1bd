from typing import Any

from fastapi import APIRouter

from projectcode import crud
from projectcode.api.deps import CurrentAdmin, CurrentUser, SessionDep
from projectcode.models import UserProfilePublic, UserProfileUpdate

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserProfilePublic)
def read_user_me(current_user: CurrentUser) -> Any:
    return current_user


@router.get("/", response_model=list[UserProfilePublic])
def read_users(session: SessionDep, current_user: CurrentAdmin) -> Any:
    return crud.list_user_profiles(session=session)


@router.patch("/{uid}", response_model=UserProfilePublic)
def update_user(*, session: SessionDep, current_user: CurrentAdmin, uid: str, profile_in: UserProfileUpdate) -> Any:
    return crud.update_user_profile(session=session, uid=uid, profile_in=profile_in)


@router.post("/{uid}/promote", response_model=UserProfilePublic)
def promote_user(*, session: SessionDep, current_user: CurrentAdmin, uid: str) -> Any:
    return crud.promote_to_admin(session=session, uid=uid)
