# -*- coding: utf-8 -*-
"""
backend/tests/modules/billing/test_stripe_webhook.py

Webhook de Stripe: firma, checkout.session.completed idempotente y
eventos ignorados.

Autor: Adlibify
Fecha: 2026-10-19
"""

import hashlib
import hmac
import json
import time
from http import HTTPStatus

import pytest

from app.modules.billing.providers.stripe_provider import CheckoutSessionInfo
from app.shared.config.settings_payments import get_payments_settings

WEBHOOK_SECRET = "whsec_test_secret"
PRO_PRICE = "price_1SN41VDuF4e9ixnRnrcvMDI4"


def _signed(payload: dict, secret: str = WEBHOOK_SECRET) -> tuple[bytes, dict]:
    body = json.dumps(payload).encode()
    timestamp = int(time.time())
    signature = hmac.new(secret.encode(), f"{timestamp}.".encode() + body, hashlib.sha256).hexdigest()
    return body, {"Stripe-Signature": f"t={timestamp},v1={signature}", "Content-Type": "application/json"}


def _event(event_type: str, session_id: str = "cs_test_hook") -> dict:
    return {
        "id": "evt_test_1",
        "object": "event",
        "type": event_type,
        "data": {"object": {"id": session_id, "object": "checkout.session"}},
    }


@pytest.fixture(autouse=True)
def webhook_secret(monkeypatch):
    settings = get_payments_settings()
    monkeypatch.setattr(settings, "stripe_webhook_secret", WEBHOOK_SECRET)
    monkeypatch.setattr(settings, "allow_insecure_webhooks", False)


@pytest.mark.asyncio
async def test_completed_event_credits_once(async_client, make_profile, stripe_provider, read_credits):
    user_id = await make_profile(credits=1)
    stripe_provider.retrieve_session.return_value = CheckoutSessionInfo(
        session_id="cs_test_hook",
        payment_status="paid",
        metadata={"user_id": str(user_id), "price_id": PRO_PRICE},
    )
    body, headers = _signed(_event("checkout.session.completed"))

    first = await async_client.post("/api/billing/webhooks/stripe", content=body, headers=headers)
    retry = await async_client.post("/api/billing/webhooks/stripe", content=body, headers=headers)

    assert first.status_code == HTTPStatus.OK
    assert first.json()["status"] == "credited"
    assert retry.json()["status"] == "already_processed"
    assert await read_credits(user_id) == 101
    stripe_provider.retrieve_session.assert_awaited_with("cs_test_hook")


@pytest.mark.asyncio
async def test_other_events_are_ignored(async_client, stripe_provider):
    body, headers = _signed(_event("payment_intent.created"))

    r = await async_client.post("/api/billing/webhooks/stripe", content=body, headers=headers)

    assert r.status_code == HTTPStatus.OK
    assert r.json()["status"] == "ignored"
    stripe_provider.retrieve_session.assert_not_awaited()


@pytest.mark.asyncio
async def test_unpaid_session_is_acknowledged_without_credit(
    async_client, make_profile, stripe_provider, read_credits
):
    user_id = await make_profile(credits=1)
    stripe_provider.retrieve_session.return_value = CheckoutSessionInfo(
        session_id="cs_test_hook",
        payment_status="unpaid",
        metadata={"user_id": str(user_id), "price_id": PRO_PRICE},
    )
    body, headers = _signed(_event("checkout.session.completed"))

    r = await async_client.post("/api/billing/webhooks/stripe", content=body, headers=headers)

    assert r.status_code == HTTPStatus.OK
    assert r.json() == {"received": True, "status": "rejected", "reason": "payment_not_completed"}
    assert await read_credits(user_id) == 1


@pytest.mark.asyncio
async def test_bad_signature_is_401(async_client, stripe_provider):
    body, headers = _signed(_event("checkout.session.completed"), secret="whsec_wrong")

    r = await async_client.post("/api/billing/webhooks/stripe", content=body, headers=headers)

    assert r.status_code == HTTPStatus.UNAUTHORIZED
    stripe_provider.retrieve_session.assert_not_awaited()


@pytest.mark.asyncio
async def test_missing_signature_is_400(async_client):
    r = await async_client.post(
        "/api/billing/webhooks/stripe",
        content=json.dumps(_event("checkout.session.completed")).encode(),
        headers={"Content-Type": "application/json"},
    )

    assert r.status_code == HTTPStatus.BAD_REQUEST
    assert r.json()["detail"]["error"] == "missing_signature"
