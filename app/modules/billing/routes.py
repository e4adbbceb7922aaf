# -*- coding: utf-8 -*-
"""
backend/app/modules/billing/routes.py

Rutas de billing para packs de créditos, checkout y verificación.

Endpoints:
- GET  /api/billing/credit-packs   (público)
- POST /api/billing/checkout       (auth) {packId} → {url, sessionId}
- POST /api/billing/verify-payment (auth) {sessionId} → {success, creditsAdded, totalCredits}

Autor: Adlibify
Fecha: 2026-10-19
"""

from __future__ import annotations

import logging
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.auth.dependencies import get_current_user_id
from app.modules.profiles.repositories import ProfileRepository
from app.shared.database.database import get_async_session
from .credit_packages import get_credit_packs
from .providers.stripe_provider import StripeProvider, get_stripe_provider
from .schemas import (
    CheckoutRequest,
    CheckoutResponse,
    CreditPackResponse,
    CreditPacksResponse,
    VerifyPaymentRequest,
    VerifyPaymentResponse,
)
from .services import CheckoutService, PaymentVerificationService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/billing",
    tags=["billing"],
)


def get_checkout_service(
    provider: StripeProvider = Depends(get_stripe_provider),
) -> CheckoutService:
    return CheckoutService(provider)


def get_verification_service(
    provider: StripeProvider = Depends(get_stripe_provider),
) -> PaymentVerificationService:
    return PaymentVerificationService(provider)


@router.get(
    "/credit-packs",
    response_model=CreditPacksResponse,
    summary="Listar packs de créditos",
)
async def list_credit_packs() -> CreditPacksResponse:
    return CreditPacksResponse(
        packs=[CreditPackResponse.model_validate(pack.model_dump()) for pack in get_credit_packs()]
    )


@router.post(
    "/checkout",
    response_model=CheckoutResponse,
    summary="Iniciar checkout de un pack",
)
async def start_checkout(
    body: CheckoutRequest,
    user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_async_session),
    service: CheckoutService = Depends(get_checkout_service),
) -> CheckoutResponse:
    # Stripe precarga el email del perfil en la página de pago
    profile = await ProfileRepository().get_by_id(session, user_id)
    await session.rollback()
    result = await service.start_checkout(
        user_id,
        body.pack_id,
        customer_email=profile.email if profile else None,
    )
    return CheckoutResponse(url=result.checkout_url, session_id=result.session_id)


@router.post(
    "/verify-payment",
    response_model=VerifyPaymentResponse,
    summary="Verificar pago y acreditar créditos",
)
async def verify_payment(
    body: VerifyPaymentRequest,
    user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_async_session),
    service: PaymentVerificationService = Depends(get_verification_service),
) -> VerifyPaymentResponse:
    result = await service.verify(session, body.session_id, expected_user_id=user_id)
    return VerifyPaymentResponse(
        credits_added=result.credits_added,
        total_credits=result.total_credits,
        message=result.message,
    )


__all__ = ["router", "get_checkout_service", "get_verification_service"]
