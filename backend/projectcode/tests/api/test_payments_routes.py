import hashlib
import hmac
import json
from unittest.mock import patch

from projectcode import crud
from projectcode.api.routes.payments import get_gateway
from projectcode.core.config import settings
from projectcode.main import app
from projectcode.services.payments import compute_payment_signature


class FakeGateway:
    def __init__(self, status: str):
        self.status = status

    def fetch_payment(self, payment_id: str) -> dict:
        return {"id": payment_id, "status": self.status}


def _verify_body(signature: str) -> dict:
    return {
        "razorpay_order_id": "order_1",
        "razorpay_payment_id": "pay_1",
        "razorpay_signature": signature,
        "planId": "pro",
    }


def test_verify_payment_upgrades_the_caller(session, client):
    crud.get_pricing_configs(session=session)
    app.dependency_overrides[get_gateway] = lambda: FakeGateway("captured")

    with patch.object(settings, "RAZORPAY_KEY_SECRET", "secret"):
        signature = compute_payment_signature("order_1", "pay_1", "secret")
        r = client.post(f"{settings.API_V1_STR}/payments/verify", json=_verify_body(signature))

    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert body["subscription"]["status"] == "pro"
    assert body["subscription"]["user_id"] == "user-1"


def test_verify_payment_with_bad_signature_is_bad_request(client):
    app.dependency_overrides[get_gateway] = lambda: FakeGateway("captured")

    with patch.object(settings, "RAZORPAY_KEY_SECRET", "secret"):
        r = client.post(f"{settings.API_V1_STR}/payments/verify", json=_verify_body("0" * 64))

    assert r.status_code == 400


def test_verify_payment_not_captured_is_bad_request(session, client):
    crud.get_pricing_configs(session=session)
    app.dependency_overrides[get_gateway] = lambda: FakeGateway("created")

    with patch.object(settings, "RAZORPAY_KEY_SECRET", "secret"):
        signature = compute_payment_signature("order_1", "pay_1", "secret")
        r = client.post(f"{settings.API_V1_STR}/payments/verify", json=_verify_body(signature))

    assert r.status_code == 400
    assert crud.get_user_subscription(session=session, user_id="user-1").status == "trial"


def test_webhook_acknowledges_signed_events(session, client):
    crud.get_pricing_configs(session=session)
    raw = json.dumps(
        {
            "event": "payment.captured",
            "payload": {
                "payment": {"entity": {"id": "pay_9"}},
                "order": {"entity": {"notes": {"userId": "user-1", "planId": "pro"}}},
            },
        }
    ).encode()
    signature = hmac.new(b"hook", raw, hashlib.sha256).hexdigest()

    with patch.object(settings, "RAZORPAY_WEBHOOK_SECRET", "hook"):
        r = client.post(
            f"{settings.API_V1_STR}/payments/webhook",
            content=raw,
            headers={"X-Razorpay-Signature": signature, "Content-Type": "application/json"},
        )
        unsigned = client.post(f"{settings.API_V1_STR}/payments/webhook", content=raw)

    assert r.status_code == 200
    assert r.json() == {"received": True}
    assert crud.get_user_subscription(session=session, user_id="user-1").subscription_id == "pay_9"
    assert unsigned.status_code == 400


def test_webhook_with_signed_non_object_body_is_bad_request(client):
    raw = b"[]"
    signature = hmac.new(b"hook", raw, hashlib.sha256).hexdigest()

    with patch.object(settings, "RAZORPAY_WEBHOOK_SECRET", "hook"):
        r = client.post(
            f"{settings.API_V1_STR}/payments/webhook",
            content=raw,
            headers={"X-Razorpay-Signature": signature},
        )

    assert r.status_code == 400


def test_webhook_is_rejected_when_no_secret_is_configured(session, client):
    crud.get_pricing_configs(session=session)
    raw = json.dumps(
        {
            "event": "payment.captured",
            "payload": {
                "payment": {"entity": {"id": "pay_forged"}},
                "order": {"entity": {"notes": {"userId": "user-1", "planId": "pro"}}},
            },
        }
    ).encode()

    with patch.object(settings, "RAZORPAY_WEBHOOK_SECRET", None):
        r = client.post(
            f"{settings.API_V1_STR}/payments/webhook",
            content=raw,
            headers={"X-Razorpay-Signature": hmac.new(b"", raw, hashlib.sha256).hexdigest()},
        )

    assert r.status_code == 400
    assert crud.get_user_subscription(session=session, user_id="user-1").status == "trial"
