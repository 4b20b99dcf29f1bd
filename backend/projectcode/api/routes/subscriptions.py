from typing import Any

from fastapi import APIRouter

from projectcode import crud
from projectcode.api.deps import CurrentAdmin, CurrentUser, SessionDep
from projectcode.models import SubscriptionPublic, SubscriptionUpdate

router = APIRouter(prefix="/subscriptions", tags=["subscriptions"])


@router.get("/me", response_model=SubscriptionPublic)
def read_subscription_me(session: SessionDep, current_user: CurrentUser) -> Any:
    return crud.get_user_subscription(session=session, user_id=current_user.uid)


@router.patch("/{uid}", response_model=SubscriptionPublic)
def update_subscription(
    *, session: SessionDep, current_user: CurrentAdmin, uid: str, subscription_in: SubscriptionUpdate
) -> Any:
    return crud.update_user_subscription(session=session, user_id=uid, subscription_in=subscription_in)
