# -*- coding: utf-8 -*-
"""
backend/app/modules/billing/providers/__init__.py

Proveedores de pago para billing (checkout de créditos).

Autor: Adlibify
Fecha: 2026-10-19
"""

from .stripe_provider import CheckoutSessionInfo, StripeProvider, StripeSessionResult, get_stripe_provider

__all__ = [
    "StripeProvider",
    "StripeSessionResult",
    "CheckoutSessionInfo",
    "get_stripe_provider",
]
