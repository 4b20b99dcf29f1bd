import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Header, Request
from pydantic import BaseModel, Field

from projectcode.api.deps import CurrentUser, SessionDep
from projectcode.models import SubscriptionPublic
from projectcode.services.payments import (
    CheckoutConfirmation,
    RazorpayGateway,
    handle_webhook_event,
    verify_checkout,
)

router = APIRouter(prefix="/payments", tags=["payments"])
logger = logging.getLogger(__name__)


class PaymentVerifyRequest(BaseModel):
    razorpay_order_id: str = Field(min_length=1)
    razorpay_payment_id: str = Field(min_length=1)
    razorpay_signature: str = Field(min_length=1)
    plan_id: str = Field(min_length=1, alias="planId")


class PaymentVerifyResponse(BaseModel):
    success: bool
    subscription: SubscriptionPublic


def get_gateway() -> RazorpayGateway:
    return RazorpayGateway()


GatewayDep = Annotated[RazorpayGateway, Depends(get_gateway)]


@router.post("/verify", response_model=PaymentVerifyResponse)
def verify_payment(
    *, session: SessionDep, current_user: CurrentUser, gateway: GatewayDep, body: PaymentVerifyRequest
) -> Any:
    subscription = verify_checkout(
        session=session,
        user_id=current_user.uid,
        confirmation=CheckoutConfirmation(
            order_id=body.razorpay_order_id,
            payment_id=body.razorpay_payment_id,
            signature=body.razorpay_signature,
            plan_id=body.plan_id,
        ),
        gateway=gateway,
    )
    return PaymentVerifyResponse(success=True, subscription=SubscriptionPublic.model_validate(subscription))


@router.post("/webhook")
async def payment_webhook(
    request: Request,
    session: SessionDep,
    x_razorpay_signature: Annotated[str | None, Header()] = None,
) -> dict[str, bool]:
    raw_body = await request.body()
    subscription = handle_webhook_event(session=session, raw_body=raw_body, signature=x_razorpay_signature)
    if subscription is not None:
        logger.info("Webhook activated %s for user %s", subscription.plan, subscription.user_id)
    return {"received": True}
