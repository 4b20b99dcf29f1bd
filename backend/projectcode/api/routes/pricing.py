from typing import Any

from fastapi import APIRouter, HTTPException

from projectcode import crud
from projectcode.api.deps import CurrentAdmin, SessionDep
from projectcode.models import PricingConfigCreate, PricingConfigPublic, PricingConfigUpdate

router = APIRouter(prefix="/pricing", tags=["pricing"])


@router.get("/", response_model=list[PricingConfigPublic])
def read_pricing(session: SessionDep) -> Any:
    return crud.get_pricing_configs(session=session)


@router.get("/{id}", response_model=PricingConfigPublic)
def read_pricing_plan(session: SessionDep, id: str) -> Any:
    plan = crud.get_pricing_config(session=session, pricing_id=id)
    if not plan:
        raise HTTPException(status_code=404, detail="Pricing plan not found")
    return plan


@router.post("/", response_model=PricingConfigPublic)
def create_pricing_plan(*, session: SessionDep, current_user: CurrentAdmin, pricing_in: PricingConfigCreate) -> Any:
    return crud.create_pricing_config(session=session, pricing_in=pricing_in)


@router.patch("/{id}", response_model=PricingConfigPublic)
def update_pricing_plan(
    *, session: SessionDep, current_user: CurrentAdmin, id: str, pricing_in: PricingConfigUpdate
) -> Any:
    return crud.update_pricing_config(session=session, pricing_id=id, pricing_in=pricing_in)
