# -*- coding: utf-8 -*-
"""
backend/app/modules/billing/services/verification_service.py

Verificación idempotente de pagos (success page y webhook de Stripe).

1. Lee la Checkout Session en Stripe.
2. Exige payment_status == "paid", metadata {user_id, price_id},
   price conocido y perfil existente.
3. En UNA transacción: INSERT en processed_checkout_sessions (UNIQUE
   session_id) + credits = credits + N.

Si el INSERT choca con la restricción UNIQUE la sesión ya fue acreditada:
se hace rollback y se responde creditsAdded=0 con el saldo actual. Así
verify-payment repetido, o un webhook reintentado, acredita una sola vez.

Autor: Adlibify
Fecha: 2026-10-19
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.profiles.repositories import ProfileRepository
from app.observability.business_metrics import CREDITS_ADDED, PAYMENT_VERIFICATIONS
from ..credit_packages import price_to_credits
from ..errors import (
    BillingProfileNotFoundError,
    MissingMetadataError,
    PaymentNotCompletedError,
    PaymentProviderError,
    PaymentVerificationError,
    SessionOwnerMismatchError,
    UnknownPriceError,
)
from ..providers.stripe_provider import CheckoutSessionInfo, StripeProvider
from ..repositories import ProcessedCheckoutSessionRepository

logger = logging.getLogger(__name__)


@dataclass
class VerificationResult:
    session_id: str
    user_id: UUID
    credits_added: int
    total_credits: int

    @property
    def already_processed(self) -> bool:
        return self.credits_added == 0

    @property
    def message(self) -> str:
        if self.already_processed:
            return "Payment already processed"
        return f"Added {self.credits_added} credits"


class PaymentVerificationService:
    def __init__(
        self,
        provider: StripeProvider,
        processed_repo: Optional[ProcessedCheckoutSessionRepository] = None,
        profile_repo: Optional[ProfileRepository] = None,
    ):
        self.provider = provider
        self.processed_repo = processed_repo or ProcessedCheckoutSessionRepository()
        self.profile_repo = profile_repo or ProfileRepository()

    def _check_session(self, info: CheckoutSessionInfo) -> tuple[UUID, str, int]:
        if info.payment_status != "paid":
            raise PaymentNotCompletedError(payment_status=info.payment_status)

        raw_user_id = info.metadata.get("user_id")
        price_id = info.metadata.get("price_id")
        if not raw_user_id or not price_id:
            raise MissingMetadataError()
        try:
            user_id = UUID(raw_user_id)
        except ValueError as e:
            raise MissingMetadataError("Invalid user_id in checkout session metadata") from e

        credits = price_to_credits().get(price_id)
        if credits is None:
            raise UnknownPriceError(price_id=price_id)
        return user_id, price_id, credits

    async def verify(
        self,
        session: AsyncSession,
        session_id: str,
        *,
        expected_user_id: Optional[UUID] = None,
    ) -> VerificationResult:
        """
        Acredita la sesión una sola vez.

        Args:
            session_id: id de la Checkout Session (cs_...)
            expected_user_id: si se pasa, la sesión debe pertenecer a ese usuario

        Raises:
            PaymentVerificationError (y subclases), BillingProfileNotFoundError,
            PaymentProviderError
        """
        try:
            info = await self.provider.retrieve_session(session_id)
            user_id, price_id, credits = self._check_session(info)
            if expected_user_id is not None and user_id != expected_user_id:
                logger.warning(
                    "Checkout session owner mismatch: session=%s owner=%s caller=%s",
                    session_id, user_id, expected_user_id,
                )
                raise SessionOwnerMismatchError()
            if await self.profile_repo.get_credits(session, user_id) is None:
                raise BillingProfileNotFoundError()
        except (PaymentVerificationError, PaymentProviderError, BillingProfileNotFoundError) as e:
            PAYMENT_VERIFICATIONS.labels(e.error_code).inc()
            logger.info("Payment verification rejected: session=%s reason=%s", session_id, e.error_code)
            raise

        try:
            await self.processed_repo.create(
                session,
                session_id=session_id,
                user_id=user_id,
                price_id=price_id,
                credits=credits,
            )
            total = await self.profile_repo.add_credits(session, user_id, credits)
            if total is None:
                await session.rollback()
                PAYMENT_VERIFICATIONS.labels("profile_not_found").inc()
                raise BillingProfileNotFoundError()
            await session.commit()
        except IntegrityError:
            await session.rollback()
            existing = await self.processed_repo.get_by_session_id(session, session_id)
            current = await self.profile_repo.get_credits(session, user_id)
            if existing is None or current is None:
                # el conflicto no fue por session_id (p.ej. perfil borrado en paralelo)
                PAYMENT_VERIFICATIONS.labels("profile_not_found").inc()
                raise BillingProfileNotFoundError()
            PAYMENT_VERIFICATIONS.labels("already_processed").inc()
            logger.info("Checkout session already processed: session=%s user=%s", session_id, user_id)
            return VerificationResult(
                session_id=session_id,
                user_id=user_id,
                credits_added=0,
                total_credits=current,
            )

        CREDITS_ADDED.labels("purchase").inc(credits)
        PAYMENT_VERIFICATIONS.labels("credited").inc()
        logger.info(
            "Credits added from checkout: session=%s user=%s price=%s credits=%d total=%d",
            session_id, user_id, price_id, credits, total,
        )
        return VerificationResult(
            session_id=session_id,
            user_id=user_id,
            credits_added=credits,
            total_credits=total,
        )


__all__ = ["PaymentVerificationService", "VerificationResult"]
