# -*- coding: utf-8 -*-
"""
backend/tests/modules/billing/test_verify_payment.py

Verificación idempotente de pagos: una Checkout Session acredita una
sola vez, con un error distinto por cada motivo de rechazo.

Autor: Adlibify
Fecha: 2026-10-19
"""

import uuid
from http import HTTPStatus

import pytest
from sqlalchemy import func, select

from app.modules.billing.errors import PaymentProviderError
from app.modules.billing.models import ProcessedCheckoutSession
from app.modules.billing.providers.stripe_provider import CheckoutSessionInfo
from app.modules.billing.services import PaymentVerificationService

PRO_PRICE = "price_1SN41VDuF4e9ixnRnrcvMDI4"


def _paid_session(user_id, price_id=PRO_PRICE, session_id="cs_test_paid", payment_status="paid"):
    return CheckoutSessionInfo(
        session_id=session_id,
        payment_status=payment_status,
        metadata={"user_id": str(user_id), "price_id": price_id},
    )


@pytest.mark.asyncio
async def test_verify_adds_credits(async_client, auth_headers, make_profile, stripe_provider, read_credits):
    user_id = await make_profile(credits=1)
    stripe_provider.retrieve_session.return_value = _paid_session(user_id)

    r = await async_client.post(
        "/api/billing/verify-payment", json={"sessionId": "cs_test_paid"}, headers=auth_headers(user_id)
    )

    assert r.status_code == HTTPStatus.OK
    data = r.json()
    assert data["success"] is True
    assert data["creditsAdded"] == 100
    assert data["totalCredits"] == 101
    assert await read_credits(user_id) == 101


@pytest.mark.asyncio
async def test_verify_twice_credits_once(
    async_client, auth_headers, make_profile, stripe_provider, read_credits, session_maker
):
    user_id = await make_profile(credits=1)
    stripe_provider.retrieve_session.return_value = _paid_session(user_id)
    headers = auth_headers(user_id)

    first = await async_client.post("/api/billing/verify-payment", json={"sessionId": "cs_test_paid"}, headers=headers)
    second = await async_client.post("/api/billing/verify-payment", json={"sessionId": "cs_test_paid"}, headers=headers)

    assert first.json()["creditsAdded"] == 100
    assert second.status_code == HTTPStatus.OK
    assert second.json()["creditsAdded"] == 0
    assert second.json()["totalCredits"] == 101
    assert await read_credits(user_id) == 101

    async with session_maker() as session:
        count = await session.scalar(select(func.count()).select_from(ProcessedCheckoutSession))
    assert count == 1


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "info_kwargs, expected_error",
    [
        ({"payment_status": "unpaid"}, "payment_not_completed"),
        ({"price_id": "price_unknown"}, "unknown_price"),
    ],
)
async def test_verify_rejections(
    async_client, auth_headers, make_profile, stripe_provider, read_credits, info_kwargs, expected_error
):
    user_id = await make_profile(credits=1)
    stripe_provider.retrieve_session.return_value = _paid_session(user_id, **info_kwargs)

    r = await async_client.post(
        "/api/billing/verify-payment", json={"sessionId": "cs_test_paid"}, headers=auth_headers(user_id)
    )

    assert r.status_code == HTTPStatus.BAD_REQUEST
    assert r.json()["error"] == expected_error
    assert await read_credits(user_id) == 1


@pytest.mark.asyncio
async def test_verify_missing_metadata(async_client, auth_headers, make_profile, stripe_provider):
    user_id = await make_profile(credits=1)
    stripe_provider.retrieve_session.return_value = CheckoutSessionInfo(
        session_id="cs_test_paid", payment_status="paid", metadata={"price_id": PRO_PRICE}
    )

    r = await async_client.post(
        "/api/billing/verify-payment", json={"sessionId": "cs_test_paid"}, headers=auth_headers(user_id)
    )

    assert r.status_code == HTTPStatus.BAD_REQUEST
    assert r.json()["error"] == "missing_metadata"


@pytest.mark.asyncio
async def test_verify_other_users_session_is_403(
    async_client, auth_headers, make_profile, stripe_provider, read_credits
):
    owner = await make_profile(credits=1)
    caller = await make_profile(credits=1)
    stripe_provider.retrieve_session.return_value = _paid_session(owner)

    r = await async_client.post(
        "/api/billing/verify-payment", json={"sessionId": "cs_test_paid"}, headers=auth_headers(caller)
    )

    assert r.status_code == HTTPStatus.FORBIDDEN
    assert r.json()["error"] == "session_owner_mismatch"
    assert await read_credits(owner) == 1
    assert await read_credits(caller) == 1


@pytest.mark.asyncio
async def test_verify_without_profile_is_404(async_client, auth_headers, stripe_provider):
    user_id = uuid.uuid4()
    stripe_provider.retrieve_session.return_value = _paid_session(user_id)

    r = await async_client.post(
        "/api/billing/verify-payment", json={"sessionId": "cs_test_paid"}, headers=auth_headers(user_id)
    )

    assert r.status_code == HTTPStatus.NOT_FOUND
    assert r.json()["error"] == "profile_not_found"


@pytest.mark.asyncio
async def test_verify_provider_error_is_502(async_client, auth_headers, make_profile, stripe_provider):
    user_id = await make_profile(credits=1)
    stripe_provider.retrieve_session.side_effect = PaymentProviderError("No such checkout session")

    r = await async_client.post(
        "/api/billing/verify-payment", json={"sessionId": "cs_missing"}, headers=auth_headers(user_id)
    )

    assert r.status_code == HTTPStatus.BAD_GATEWAY
    assert r.json()["error"] == "provider_error"


@pytest.mark.asyncio
async def test_service_distinct_sessions_accumulate(db_session, make_profile, stripe_provider):
    user_id = await make_profile(credits=0)
    service = PaymentVerificationService(stripe_provider)

    stripe_provider.retrieve_session.return_value = _paid_session(user_id, session_id="cs_a")
    first = await service.verify(db_session, "cs_a")
    stripe_provider.retrieve_session.return_value = _paid_session(
        user_id, price_id="price_1SN41FDuF4e9ixnRPCvgrLSl", session_id="cs_b"
    )
    second = await service.verify(db_session, "cs_b")

    assert (first.credits_added, first.total_credits) == (100, 100)
    assert (second.credits_added, second.total_credits) == (30, 130)
    assert second.message == "Added 30 credits"
