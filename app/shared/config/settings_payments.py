# -*- coding: utf-8 -*-
"""
backend/app/shared/config/settings_payments.py

Configuración de pagos (Stripe Checkout) para Adlibify.

Descripción:
    Centraliza claves de Stripe, rutas de retorno del checkout
    y el flag de webhooks inseguros para desarrollo local.

Autor: Adlibify
Fecha: 2026-10-19
"""

from __future__ import annotations

import os
from typing import Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PaymentsSettings(BaseSettings):
    """Configuración de sistema de pagos."""

    # =========================================================================
    # FEATURE FLAGS
    # =========================================================================

    payments_enabled: bool = Field(
        default=True,
        description="Habilita la compra de créditos globalmente"
    )

    # =========================================================================
    # STRIPE
    # =========================================================================

    stripe_secret_key: Optional[str] = Field(
        default=None,
        description="Stripe secret key (sk_live_... o sk_test_...)"
    )

    stripe_webhook_secret: Optional[str] = Field(
        default=None,
        description="Stripe webhook signing secret (whsec_...)"
    )

    stripe_webhook_tolerance_seconds: int = Field(
        default=300,
        description="Tolerancia para validación de timestamp de webhooks Stripe (5 minutos)"
    )

    allow_insecure_webhooks: bool = Field(
        default=False,
        description="Permite webhooks sin validación de firma (SOLO DESARROLLO)"
    )

    # =========================================================================
    # CHECKOUT / FRONTEND
    # =========================================================================

    frontend_url: Optional[str] = Field(
        default=None,
        description="URL base del frontend para redirects de checkout"
    )

    checkout_success_path: str = Field(
        default="/payment-success?session_id={CHECKOUT_SESSION_ID}",
        description="Ruta de retorno tras pago exitoso (placeholder de Stripe incluido)"
    )

    checkout_cancel_path: str = Field(
        default="/pricing",
        description="Ruta de retorno si el usuario cancela el checkout"
    )

    @field_validator("frontend_url", mode="before")
    @classmethod
    def _load_frontend_url(cls, v: Optional[str]) -> Optional[str]:
        """Fallback a FRONTEND_URL."""
        if v:
            return v
        return os.getenv("FRONTEND_URL") or "http://localhost:8080"

    @property
    def stripe_configured(self) -> bool:
        return bool(self.payments_enabled and self.stripe_secret_key)

    def success_url(self) -> str:
        return f"{self.frontend_url.rstrip('/')}{self.checkout_success_path}"

    def cancel_url(self) -> str:
        return f"{self.frontend_url.rstrip('/')}{self.checkout_cancel_path}"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


# Singleton global
_payments_settings: Optional[PaymentsSettings] = None


def get_payments_settings() -> PaymentsSettings:
    """
    Obtiene la instancia global de configuración de pagos.

    Returns:
        PaymentsSettings: Configuración de pagos
    """
    global _payments_settings
    if _payments_settings is None:
        _payments_settings = PaymentsSettings()
    return _payments_settings


__all__ = [
    "PaymentsSettings",
    "get_payments_settings",
]
# Fin del archivo backend/app/shared/config/settings_payments.py
