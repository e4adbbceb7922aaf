# -*- coding: utf-8 -*-
"""
backend/app/modules/billing/schemas.py

Esquemas Pydantic para billing (JSON en camelCase).

Autor: Adlibify
Fecha: 2026-10-19
"""

from __future__ import annotations

from typing import List, Optional

from app.shared.utils.base_models import ApiModel, Field


class CreditPackResponse(ApiModel):
    id: str
    name: str
    credits: int
    price_id: str
    amount_cents: int
    currency: str
    popular: bool


class CreditPacksResponse(ApiModel):
    packs: List[CreditPackResponse]


class CheckoutRequest(ApiModel):
    pack_id: str = Field(
        description="ID del pack de créditos (starter, pro, business).",
        min_length=1,
        max_length=50,
    )


class CheckoutResponse(ApiModel):
    url: str = Field(description="URL de Stripe Checkout a la que se redirige al usuario.")
    session_id: str


class VerifyPaymentRequest(ApiModel):
    session_id: str = Field(min_length=1, max_length=255)


class VerifyPaymentResponse(ApiModel):
    success: bool = True
    credits_added: int
    total_credits: int
    message: Optional[str] = None


__all__ = [
    "CreditPackResponse",
    "CreditPacksResponse",
    "CheckoutRequest",
    "CheckoutResponse",
    "VerifyPaymentRequest",
    "VerifyPaymentResponse",
]
