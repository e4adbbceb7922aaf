# -*- coding: utf-8 -*-
"""
backend/app/modules/billing/services/checkout_service.py

Inicio de checkout: pack → price de Stripe → Checkout Session.

Autor: Adlibify
Fecha: 2026-10-19
"""

from __future__ import annotations

import logging
from typing import Optional
from uuid import UUID

from app.shared.config.settings_payments import PaymentsSettings, get_payments_settings
from ..credit_packages import get_pack_by_id
from ..errors import InvalidPackError, PaymentsNotConfiguredError
from ..providers.stripe_provider import StripeProvider, StripeSessionResult

logger = logging.getLogger(__name__)


class CheckoutService:
    def __init__(
        self,
        provider: StripeProvider,
        payments_settings: Optional[PaymentsSettings] = None,
    ):
        self.provider = provider
        self.payments_settings = payments_settings or get_payments_settings()

    async def start_checkout(
        self,
        user_id: UUID,
        pack_id: str,
        *,
        customer_email: Optional[str] = None,
    ) -> StripeSessionResult:
        if not self.payments_settings.payments_enabled:
            raise PaymentsNotConfiguredError("Payments are disabled")

        pack = get_pack_by_id(pack_id)
        if pack is None:
            raise InvalidPackError(f"Unknown credit pack: {pack_id}", pack_id=pack_id)

        result = await self.provider.create_checkout_session(
            user_id=str(user_id),
            price_id=pack.price_id,
            success_url=self.payments_settings.success_url(),
            cancel_url=self.payments_settings.cancel_url(),
            customer_email=customer_email,
        )
        logger.info(
            "Checkout started: user=%s pack=%s credits=%d session=%s",
            user_id, pack.id, pack.credits, result.session_id,
        )
        return result


__all__ = ["CheckoutService"]
