# -*- coding: utf-8 -*-
"""
backend/tests/modules/billing/test_checkout.py

POST /api/billing/checkout y el StripeProvider contra el SDK mockeado.

Autor: Adlibify
Fecha: 2026-10-19
"""

import uuid
from http import HTTPStatus
from types import SimpleNamespace
from unittest.mock import patch

import pytest
import stripe

from app.modules.billing.errors import PaymentProviderError, PaymentsNotConfiguredError
from app.modules.billing.providers.stripe_provider import StripeProvider, StripeSessionResult
from app.shared.config.settings_payments import get_payments_settings


@pytest.mark.asyncio
async def test_checkout_maps_pack_to_price(async_client, auth_headers, stripe_provider):
    user_id = uuid.uuid4()
    stripe_provider.create_checkout_session.return_value = StripeSessionResult(
        checkout_url="https://checkout.stripe.com/c/pay/cs_test_1",
        session_id="cs_test_1",
    )

    r = await async_client.post("/api/billing/checkout", json={"packId": "pro"}, headers=auth_headers(user_id))

    assert r.status_code == HTTPStatus.OK
    assert r.json() == {"url": "https://checkout.stripe.com/c/pay/cs_test_1", "sessionId": "cs_test_1"}
    kwargs = stripe_provider.create_checkout_session.await_args.kwargs
    assert kwargs["user_id"] == str(user_id)
    assert kwargs["price_id"] == "price_1SN41VDuF4e9ixnRnrcvMDI4"
    assert kwargs["success_url"].endswith("/payment-success?session_id={CHECKOUT_SESSION_ID}")
    assert kwargs["cancel_url"].endswith("/pricing")
    assert kwargs["customer_email"] is None


@pytest.mark.asyncio
async def test_checkout_prefills_profile_email(async_client, auth_headers, make_profile, stripe_provider):
    user_id = await make_profile(credits=0)
    stripe_provider.create_checkout_session.return_value = StripeSessionResult(
        checkout_url="https://checkout.stripe.com/c/pay/cs_test_3",
        session_id="cs_test_3",
    )

    r = await async_client.post("/api/billing/checkout", json={"packId": "starter"}, headers=auth_headers(user_id))

    assert r.status_code == HTTPStatus.OK
    kwargs = stripe_provider.create_checkout_session.await_args.kwargs
    assert kwargs["customer_email"] == f"{user_id.hex[:8]}@example.com"


@pytest.mark.asyncio
async def test_checkout_unknown_pack_is_400(async_client, auth_headers, stripe_provider):
    r = await async_client.post(
        "/api/billing/checkout", json={"packId": "enterprise"}, headers=auth_headers(uuid.uuid4())
    )

    assert r.status_code == HTTPStatus.BAD_REQUEST
    assert r.json()["error"] == "invalid_pack"
    stripe_provider.create_checkout_session.assert_not_awaited()


@pytest.mark.asyncio
async def test_checkout_requires_auth(async_client):
    r = await async_client.post("/api/billing/checkout", json={"packId": "pro"})

    assert r.status_code == HTTPStatus.UNAUTHORIZED


@pytest.mark.asyncio
async def test_provider_builds_single_line_item_session():
    provider = StripeProvider(secret_key="sk_test_123")
    fake_session = SimpleNamespace(id="cs_test_2", url="https://checkout.stripe.com/c/pay/cs_test_2")

    with patch.object(stripe.checkout.Session, "create", return_value=fake_session) as create:
        result = await provider.create_checkout_session(
            user_id="u-1",
            price_id="price_abc",
            success_url="https://app.test/payment-success?session_id={CHECKOUT_SESSION_ID}",
            cancel_url="https://app.test/pricing",
        )

    assert result.session_id == "cs_test_2"
    params = create.call_args.kwargs
    assert params["mode"] == "payment"
    assert params["line_items"] == [{"price": "price_abc", "quantity": 1}]
    assert params["metadata"] == {"user_id": "u-1", "price_id": "price_abc"}
    assert params["api_key"] == "sk_test_123"


@pytest.mark.asyncio
async def test_provider_wraps_stripe_errors():
    provider = StripeProvider(secret_key="sk_test_123")

    with patch.object(stripe.checkout.Session, "retrieve", side_effect=stripe.InvalidRequestError("No such session", "id")):
        with pytest.raises(PaymentProviderError):
            await provider.retrieve_session("cs_missing")


@pytest.mark.asyncio
async def test_provider_without_key_is_not_configured(monkeypatch):
    monkeypatch.setattr(get_payments_settings(), "stripe_secret_key", None)
    provider = StripeProvider()

    assert provider.is_configured is False

    with pytest.raises(PaymentsNotConfiguredError):
        await provider.retrieve_session("cs_x")
