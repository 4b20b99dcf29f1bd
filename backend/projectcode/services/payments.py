import hashlib
import hmac
import json
import logging
from dataclasses import dataclass
from typing import Any

import httpx
from sqlmodel import Session

from projectcode import crud
from projectcode.core.config import settings
from projectcode.exceptions import (
    InvalidWebhookPayloadError,
    NotFoundError,
    PaymentNotCapturedError,
    SignatureMismatchError,
)
from projectcode.models import DAY_MS, PricingConfig, Subscription, SubscriptionUpdate, now_ms

logger = logging.getLogger(__name__)

SUCCESSFUL_PAYMENT_STATUSES = frozenset({"captured", "authorized"})
PERIOD_DAYS = {"monthly": 30, "yearly": 365}


def _require_secret(secret: str | None) -> str:
    if not secret:
        # Never verify against an empty key.
        logger.error("Payment signing secret is not configured; rejecting signature")
        raise SignatureMismatchError("Payment signing secret is not configured")
    return secret


def compute_payment_signature(order_id: str, payment_id: str, secret: str) -> str:
    payload = f"{order_id}|{payment_id}"
    return hmac.new(secret.encode("utf-8"), payload.encode("utf-8"), hashlib.sha256).hexdigest()


def verify_payment_signature(order_id: str, payment_id: str, signature: str, secret: str | None) -> None:
    expected = compute_payment_signature(order_id, payment_id, _require_secret(secret))
    if not hmac.compare_digest(expected.encode("utf-8"), (signature or "").encode("utf-8")):
        raise SignatureMismatchError("Invalid payment signature")


def verify_webhook_signature(raw_body: bytes, signature: str | None, secret: str | None) -> None:
    key = _require_secret(secret)
    if not signature:
        raise SignatureMismatchError("Missing signature")
    expected = hmac.new(key.encode("utf-8"), raw_body, hashlib.sha256).hexdigest()
    if not hmac.compare_digest(expected.encode("utf-8"), signature.encode("utf-8")):
        raise SignatureMismatchError("Invalid signature")


def parse_webhook_body(raw_body: bytes) -> dict[str, Any]:
    try:
        body = json.loads(raw_body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise InvalidWebhookPayloadError("Webhook body is not valid JSON") from e
    if not isinstance(body, dict):
        raise InvalidWebhookPayloadError("Webhook body must be a JSON object")
    return body


def compute_period_end(interval: str, now: int) -> int:
    """Fixed-length periods: 30 days for monthly, 365 for anything else."""
    return now + PERIOD_DAYS.get(interval, PERIOD_DAYS["yearly"]) * DAY_MS


def subscription_plan_name(plan: PricingConfig) -> str:
    return "pro_tier" if plan.id == "pro" else plan.id


class RazorpayGateway:
    """Read-only view of the payment gateway, used as a second source of truth."""

    def __init__(
        self,
        key_id: str | None = None,
        key_secret: str | None = None,
        base_url: str | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        self.key_id = key_id or settings.RAZORPAY_KEY_ID or ""
        self.key_secret = key_secret or settings.RAZORPAY_KEY_SECRET or ""
        self.base_url = (base_url or settings.RAZORPAY_API_BASE).rstrip("/")
        self._transport = transport

    def fetch_payment(self, payment_id: str) -> dict[str, Any]:
        with httpx.Client(
            base_url=self.base_url,
            auth=(self.key_id, self.key_secret),
            timeout=20.0,
            transport=self._transport,
        ) as client:
            response = client.get(f"/payments/{payment_id}")
            response.raise_for_status()
            return response.json()


@dataclass(frozen=True)
class CheckoutConfirmation:
    order_id: str
    payment_id: str
    signature: str
    plan_id: str


def activate_subscription(
    *, session: Session, user_id: str, plan: PricingConfig, payment_id: str, now: int | None = None
) -> Subscription:
    # No replay guard: a repeated delivery extends the period again.
    now = now if now is not None else now_ms()
    return crud.set_user_subscription(
        session=session,
        user_id=user_id,
        subscription_in=SubscriptionUpdate(
            status="pro",
            plan=subscription_plan_name(plan),
            subscription_id=payment_id,
            current_period_end=compute_period_end(plan.interval, now),
        ),
    )


def verify_checkout(
    *,
    session: Session,
    user_id: str,
    confirmation: CheckoutConfirmation,
    gateway: RazorpayGateway,
    secret: str | None = None,
    now: int | None = None,
) -> Subscription:
    """
    Activate a subscription from a checkout callback.

    Order: signature check, gateway status re-fetch, plan lookup, write.
    Each step raises on failure and nothing is persisted before the write.
    """
    verify_payment_signature(
        confirmation.order_id,
        confirmation.payment_id,
        confirmation.signature,
        secret if secret is not None else settings.RAZORPAY_KEY_SECRET,
    )

    payment = gateway.fetch_payment(confirmation.payment_id)
    status = payment.get("status")
    if status not in SUCCESSFUL_PAYMENT_STATUSES:
        logger.warning("Payment %s rejected by gateway status %s", confirmation.payment_id, status)
        raise PaymentNotCapturedError(confirmation.payment_id, status)

    plan = crud.get_pricing_config(session=session, pricing_id=confirmation.plan_id)
    if not plan:
        raise NotFoundError("Invalid plan")

    subscription = activate_subscription(
        session=session, user_id=user_id, plan=plan, payment_id=confirmation.payment_id, now=now
    )
    logger.info("Activated %s for user %s until %s", subscription.plan, user_id, subscription.current_period_end)
    return subscription


def handle_webhook_event(
    *,
    session: Session,
    raw_body: bytes,
    signature: str | None,
    secret: str | None = None,
    now: int | None = None,
) -> Subscription | None:
    """Process one gateway webhook delivery. Returns the activated subscription, if any."""
    verify_webhook_signature(
        raw_body,
        signature,
        secret if secret is not None else settings.RAZORPAY_WEBHOOK_SECRET,
    )
    body = parse_webhook_body(raw_body)
    event = body.get("event")
    payload = body.get("payload") or {}
    payment = (payload.get("payment") or {}).get("entity")
    order = (payload.get("order") or {}).get("entity")

    if event in ("payment.captured", "payment.authorized") and payment and order:
        notes = order.get("notes") or {}
        user_id = notes.get("userId")
        plan_id = notes.get("planId")
        if not user_id or not plan_id:
            logger.error("Missing userId or planId in order notes for payment %s", payment.get("id"))
            return None

        plan = crud.get_pricing_config(session=session, pricing_id=plan_id)
        if not plan:
            logger.error("Invalid plan ID in webhook: %s", plan_id)
            return None
        return activate_subscription(
            session=session, user_id=user_id, plan=plan, payment_id=payment.get("id"), now=now
        )

    if event == "payment.failed":
        logger.info("Payment failed: %s", (payment or {}).get("id"))
    return None
