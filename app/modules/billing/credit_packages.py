# -*- coding: utf-8 -*-
"""
backend/app/modules/billing/credit_packages.py

Configuración de packs de créditos (source of truth).

Cada pack mapea a un price de Stripe; la tabla price_id → créditos que usa
la verificación de pagos se deriva de aquí. CREDIT_PACKS_JSON permite
reemplazar los packs sin redeploy.

Autor: Adlibify
Fecha: 2026-10-19
"""

from __future__ import annotations

import json
import logging
import os
from typing import Dict, List, Optional

from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)


class CreditPack(BaseModel):
    """Pack de créditos disponible para compra."""
    id: str
    name: str
    credits: int
    price_id: str
    amount_cents: int
    currency: str = "AUD"
    popular: bool = False


# Packs por defecto (hardcoded)
DEFAULT_PACKS: List[dict] = [
    {
        "id": "starter",
        "name": "Starter",
        "credits": 30,
        "price_id": "price_1SN41FDuF4e9ixnRPCvgrLSl",
        "amount_cents": 2900,  # $29.00 AUD
        "currency": "AUD",
        "popular": False,
    },
    {
        "id": "pro",
        "name": "Pro",
        "credits": 100,
        "price_id": "price_1SN41VDuF4e9ixnRnrcvMDI4",
        "amount_cents": 7900,  # $79.00 AUD
        "currency": "AUD",
        "popular": True,
    },
    {
        "id": "business",
        "name": "Business",
        "credits": 250,
        "price_id": "price_1SN41lDuF4e9ixnRsGjx6QXX",
        "amount_cents": 17900,  # $179.00 AUD
        "currency": "AUD",
        "popular": False,
    },
]


def _validate_unique_ids(packs: List[dict]) -> List[dict]:
    """
    Deduplica por id y por price_id (mantiene la primera ocurrencia).

    Un price_id repetido haría ambigua la cantidad de créditos a acreditar.
    """
    seen_ids: set[str] = set()
    seen_prices: set[str] = set()
    unique: List[dict] = []

    for pack in packs:
        pack_id = pack.get("id")
        price_id = pack.get("price_id")
        if pack_id in seen_ids or price_id in seen_prices:
            logger.warning(
                "Duplicate credit pack detected: id=%s price_id=%s. Keeping first occurrence.",
                pack_id, price_id,
            )
            continue
        seen_ids.add(pack_id)
        seen_prices.add(price_id)
        unique.append(pack)

    return unique


def get_credit_packs() -> List[CreditPack]:
    """
    Lista de packs disponibles.

    Primero intenta CREDIT_PACKS_JSON (array JSON); si no existe o es
    inválido usa los packs por defecto.
    """
    packs_json = os.getenv("CREDIT_PACKS_JSON")
    packs_data = DEFAULT_PACKS

    if packs_json:
        try:
            loaded = json.loads(packs_json)
            if isinstance(loaded, list):
                packs_data = loaded
            else:
                logger.warning("CREDIT_PACKS_JSON must be a JSON array. Using default packs.")
        except json.JSONDecodeError as e:
            logger.warning("Failed to parse CREDIT_PACKS_JSON: %s. Using default packs.", e)

    try:
        return [CreditPack(**pack) for pack in _validate_unique_ids(packs_data)]
    except ValidationError as e:
        logger.warning("Invalid pack in CREDIT_PACKS_JSON: %s. Using default packs.", e)
        return [CreditPack(**pack) for pack in DEFAULT_PACKS]


def get_pack_by_id(pack_id: str) -> Optional[CreditPack]:
    for pack in get_credit_packs():
        if pack.id == pack_id:
            return pack
    return None


def price_to_credits() -> Dict[str, int]:
    """Tabla price_id → créditos a acreditar."""
    return {pack.price_id: pack.credits for pack in get_credit_packs()}


__all__ = [
    "CreditPack",
    "DEFAULT_PACKS",
    "get_credit_packs",
    "get_pack_by_id",
    "price_to_credits",
]
