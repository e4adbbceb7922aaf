# -*- coding: utf-8 -*-
"""
backend/app/modules/billing/__init__.py

Módulo de billing: packs de créditos, checkout con Stripe y
verificación idempotente de pagos.

Autor: Adlibify
Fecha: 2026-10-19
"""

from .credit_packages import CreditPack, get_credit_packs, get_pack_by_id, price_to_credits
from .models import ProcessedCheckoutSession

__all__ = [
    "CreditPack",
    "ProcessedCheckoutSession",
    "get_credit_packs",
    "get_pack_by_id",
    "price_to_credits",
]
