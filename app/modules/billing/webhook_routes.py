# -*- coding: utf-8 -*-
"""
backend/app/modules/billing/webhook_routes.py

Webhook de Stripe para billing.

Endpoint:
- POST /api/billing/webhooks/stripe

Eventos:
- checkout.session.completed: corre la misma verificación que
  /verify-payment. Los reintentos de Stripe no acreditan de nuevo
  (UNIQUE session_id).
- Cualquier otro evento se acusa y se ignora.

Autor: Adlibify
Fecha: 2026-10-19
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

import stripe
from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.config.settings_payments import get_payments_settings
from app.shared.database.database import get_async_session
from .errors import PaymentVerificationError
from .routes import get_verification_service
from .services import PaymentVerificationService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/billing/webhooks",
    tags=["billing:webhooks"],
)


def verify_stripe_webhook_signature(
    payload: bytes,
    sig_header: str,
    webhook_secret: Optional[str] = None,
) -> stripe.Event:
    """
    Verifica la firma de un webhook de Stripe.

    Raises:
        stripe.SignatureVerificationError: firma inválida o timestamp fuera de tolerancia
        ValueError: sin webhook secret configurado o payload inválido
    """
    settings = get_payments_settings()
    secret = webhook_secret or settings.stripe_webhook_secret
    if not secret:
        raise ValueError("STRIPE_WEBHOOK_SECRET not configured")

    return stripe.Webhook.construct_event(
        payload,
        sig_header,
        secret,
        tolerance=settings.stripe_webhook_tolerance_seconds,
    )


@router.post("/stripe", status_code=status.HTTP_200_OK)
async def stripe_billing_webhook(
    request: Request,
    session: AsyncSession = Depends(get_async_session),
    service: PaymentVerificationService = Depends(get_verification_service),
) -> Dict[str, Any]:
    settings = get_payments_settings()

    raw_body = await request.body()
    sig_header = request.headers.get("Stripe-Signature")

    if settings.allow_insecure_webhooks:
        logger.warning("INSECURE: Skipping webhook signature verification")
        try:
            event = stripe.Event.construct_from(json.loads(raw_body), stripe.api_key)
        except ValueError:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail={"error": "invalid_payload", "message": "Invalid webhook payload"},
            )
    else:
        if not sig_header:
            logger.warning("Webhook received without Stripe-Signature header")
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail={"error": "missing_signature", "message": "Missing Stripe-Signature header"},
            )
        if not settings.stripe_webhook_secret:
            logger.error("Stripe webhook received but STRIPE_WEBHOOK_SECRET is not configured")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail={"error": "webhook_not_configured", "message": "Webhook not configured"},
            )
        try:
            event = verify_stripe_webhook_signature(raw_body, sig_header)
        except stripe.SignatureVerificationError as e:
            logger.warning("Invalid webhook signature: %s", e)
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail={"error": "invalid_signature", "message": "Invalid signature"},
            )
        except ValueError as e:
            logger.warning("Invalid webhook payload: %s", e)
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail={"error": "invalid_payload", "message": "Invalid webhook payload"},
            )

    logger.info("Billing webhook received: type=%s id=%s", event.type, event.id)

    if event.type != "checkout.session.completed":
        return {"received": True, "status": "ignored", "event_type": event.type}

    checkout_session_id = event.data.object["id"]
    try:
        result = await service.verify(session, checkout_session_id)
    except PaymentVerificationError as e:
        # rechazo definitivo: acusar recibo para que Stripe no reintente
        logger.warning(
            "Webhook checkout session not credited: session=%s reason=%s",
            checkout_session_id, e.error_code,
        )
        return {"received": True, "status": "rejected", "reason": e.error_code}

    return {
        "received": True,
        "status": "already_processed" if result.already_processed else "credited",
        "credits_added": result.credits_added,
    }


__all__ = ["router", "verify_stripe_webhook_signature"]
