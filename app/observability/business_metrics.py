# -*- coding: utf-8 -*-
"""
backend/app/observability/business_metrics.py

Contadores de negocio: créditos, generaciones, ingesta y pagos.
Se exponen en el mismo /metrics que las métricas HTTP.

Autor: Adlibify
Fecha: 2026-10-19
"""
from __future__ import annotations

from prometheus_client import Counter

GENERATIONS_DISPATCHED = Counter(
    "adlibify_generations_dispatched_total",
    "Generation requests created, by workflow and webhook outcome",
    ["workflow", "outcome"],
)

GENERATIONS_REAPED = Counter(
    "adlibify_generations_reaped_total",
    "Generations moved to failed by the stuck-job reaper",
)

VIDEO_INGESTIONS = Counter(
    "adlibify_video_ingestions_total",
    "Video ingestion callbacks, by outcome",
    ["outcome"],
)

CREDITS_ADDED = Counter(
    "adlibify_credits_added_total",
    "Credits granted (signup or purchase)",
    ["source"],
)

CREDITS_DEBITED = Counter(
    "adlibify_credits_debited_total",
    "Credits consumed by completed generations",
)

PAYMENT_VERIFICATIONS = Counter(
    "adlibify_payment_verifications_total",
    "Checkout session verifications, by outcome",
    ["outcome"],
)

__all__ = [
    "GENERATIONS_DISPATCHED",
    "GENERATIONS_REAPED",
    "VIDEO_INGESTIONS",
    "CREDITS_ADDED",
    "CREDITS_DEBITED",
    "PAYMENT_VERIFICATIONS",
]
