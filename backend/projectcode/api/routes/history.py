import uuid
from typing import Any

from fastapi import APIRouter, Query

from projectcode import crud
from projectcode.api.deps import CurrentUser, SessionDep
from projectcode.core.config import settings
from projectcode.models import (
    AnalysisHistoryItemCreate,
    AnalysisHistoryItemPublic,
    AnalysisHistoryItemUpdate,
    PracticeHistoryItemCreate,
    PracticeHistoryItemPublic,
    PracticeHistoryItemUpdate,
)

router = APIRouter(prefix="/history", tags=["history"])


@router.get("/practice", response_model=list[PracticeHistoryItemPublic])
def read_practice_history(
    session: SessionDep,
    current_user: CurrentUser,
    limit: int = Query(default=settings.PRACTICE_HISTORY_LIMIT, ge=1, le=settings.PRACTICE_HISTORY_LIMIT),
) -> Any:
    return crud.list_practice_history(session=session, user_id=current_user.uid, limit=limit)


@router.post("/practice", response_model=PracticeHistoryItemPublic)
def create_practice_history_item(
    *, session: SessionDep, current_user: CurrentUser, item_in: PracticeHistoryItemCreate
) -> Any:
    return crud.add_practice_history_item(session=session, user_id=current_user.uid, item_in=item_in)


@router.patch("/practice/{id}", response_model=PracticeHistoryItemPublic)
def update_practice_history_item(
    *, session: SessionDep, current_user: CurrentUser, id: uuid.UUID, item_in: PracticeHistoryItemUpdate
) -> Any:
    return crud.update_practice_history_item(
        session=session, user_id=current_user.uid, item_id=id, item_in=item_in
    )


@router.get("/analysis", response_model=list[AnalysisHistoryItemPublic])
def read_analysis_history(
    session: SessionDep,
    current_user: CurrentUser,
    limit: int = Query(default=settings.ANALYSIS_HISTORY_LIMIT, ge=1, le=settings.ANALYSIS_HISTORY_LIMIT),
) -> Any:
    return crud.list_analysis_history(session=session, user_id=current_user.uid, limit=limit)


@router.post("/analysis", response_model=AnalysisHistoryItemPublic)
def create_analysis_history_item(
    *, session: SessionDep, current_user: CurrentUser, item_in: AnalysisHistoryItemCreate
) -> Any:
    return crud.add_analysis_history_item(session=session, user_id=current_user.uid, item_in=item_in)


@router.patch("/analysis/{id}", response_model=AnalysisHistoryItemPublic)
def update_analysis_history_item(
    *, session: SessionDep, current_user: CurrentUser, id: uuid.UUID, item_in: AnalysisHistoryItemUpdate
) -> Any:
    return crud.update_analysis_history_item(
        session=session, user_id=current_user.uid, item_id=id, item_in=item_in
    )
