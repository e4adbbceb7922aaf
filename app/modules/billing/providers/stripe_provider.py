# -*- coding: utf-8 -*-
"""
backend/app/modules/billing/providers/stripe_provider.py

Proveedor Stripe para la compra de packs de créditos.

- create_checkout_session: Checkout Session (mode=payment) para un price
- retrieve_session: lectura de la sesión para verificar el pago

El SDK de Stripe es síncrono; todas las llamadas van por run_in_threadpool.

Autor: Adlibify
Fecha: 2026-10-19
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import stripe
from fastapi.concurrency import run_in_threadpool

from app.shared.config.settings_payments import get_payments_settings
from ..errors import PaymentProviderError, PaymentsNotConfiguredError

logger = logging.getLogger(__name__)


@dataclass
class StripeSessionResult:
    """Resultado de crear una sesión de checkout en Stripe."""
    checkout_url: str
    session_id: str
    provider: str = "stripe"


@dataclass
class CheckoutSessionInfo:
    """Campos de la Checkout Session que usa la verificación."""
    session_id: str
    payment_status: Optional[str]
    metadata: Dict[str, str] = field(default_factory=dict)


def _as_dict(obj: Any) -> Dict[str, Any]:
    if obj is None:
        return {}
    to_dict = getattr(obj, "to_dict", None)
    if callable(to_dict):
        return dict(to_dict())
    return dict(obj)


class StripeProvider:
    """
    Proveedor de pagos Stripe.

    Las sesiones llevan metadata {user_id, price_id}: es lo único que la
    verificación necesita para saber a quién acreditar y cuánto.
    """

    def __init__(self, secret_key: Optional[str] = None):
        self._secret_key = secret_key or get_payments_settings().stripe_secret_key
        if not self._secret_key:
            logger.warning("STRIPE_SECRET_KEY not configured")

    @property
    def is_configured(self) -> bool:
        return bool(self._secret_key)

    def _require_configured(self) -> None:
        if not self.is_configured:
            raise PaymentsNotConfiguredError("Stripe is not configured. Set STRIPE_SECRET_KEY.")

    async def create_checkout_session(
        self,
        *,
        user_id: str,
        price_id: str,
        success_url: str,
        cancel_url: str,
        customer_email: Optional[str] = None,
    ) -> StripeSessionResult:
        """
        Crea una Checkout Session de un solo line item.

        Raises:
            PaymentsNotConfiguredError: sin secret key.
            PaymentProviderError: Stripe respondió con error.
        """
        self._require_configured()

        logger.info("Creating Stripe checkout session: user=%s price=%s", user_id, price_id)

        session_params: Dict[str, Any] = {
            "mode": "payment",
            "payment_method_types": ["card"],
            "line_items": [{"price": price_id, "quantity": 1}],
            "success_url": success_url,
            "cancel_url": cancel_url,
            "metadata": {"user_id": user_id, "price_id": price_id},
            "client_reference_id": user_id,
            "api_key": self._secret_key,
        }
        if customer_email:
            session_params["customer_email"] = customer_email

        try:
            session = await run_in_threadpool(stripe.checkout.Session.create, **session_params)
        except stripe.StripeError as e:
            logger.error("Stripe checkout session creation failed: user=%s error=%s", user_id, e)
            raise PaymentProviderError(f"Failed to create checkout session: {e.user_message or e}") from e

        logger.info("Stripe checkout session created: session_id=%s user=%s", session.id, user_id)
        return StripeSessionResult(checkout_url=session.url, session_id=session.id)

    async def retrieve_session(self, session_id: str) -> CheckoutSessionInfo:
        """
        Lee una Checkout Session.

        Raises:
            PaymentsNotConfiguredError: sin secret key.
            PaymentProviderError: sesión inexistente o error de Stripe.
        """
        self._require_configured()

        try:
            session = await run_in_threadpool(
                stripe.checkout.Session.retrieve,
                session_id,
                api_key=self._secret_key,
            )
        except stripe.StripeError as e:
            logger.error("Stripe session retrieve failed: session=%s error=%s", session_id, e)
            raise PaymentProviderError(f"Failed to retrieve checkout session: {e.user_message or e}") from e

        return CheckoutSessionInfo(
            session_id=session.id,
            payment_status=session.payment_status,
            metadata={k: str(v) for k, v in _as_dict(session.metadata).items()},
        )


def get_stripe_provider() -> StripeProvider:
    """Dependencia FastAPI."""
    return StripeProvider()


__all__ = [
    "StripeProvider",
    "StripeSessionResult",
    "CheckoutSessionInfo",
    "get_stripe_provider",
]
