# -*- coding: utf-8 -*-
"""
backend/app/routes/master_routes.py

Router maestro: todos los routers de módulo se montan bajo /api.

Autor: Adlibify
Fecha: 2026-10-19
"""
from __future__ import annotations

import logging

from fastapi import APIRouter

from app.modules.billing.routes import router as billing_router
from app.modules.billing.webhook_routes import router as billing_webhook_router
from app.modules.generations.internal_routes import router as generations_internal_router
from app.modules.generations.routes import router as generations_router
from app.modules.profiles.routes import router as profiles_router
from app.modules.workflows.routes import router as workflows_router

logger = logging.getLogger(__name__)

API_PREFIX = "/api"

api = APIRouter(prefix=API_PREFIX)


def _include(target: APIRouter, router: APIRouter, name: str) -> None:
    """Incluye un router en la capa dada y registra trazabilidad en logs."""
    target.include_router(router)
    logger.debug(
        "Router '%s' montado en prefix '%s' (router.prefix='%s')",
        name,
        target.prefix or "/",
        getattr(router, "prefix", ""),
    )


_include(api, profiles_router, "profiles")
_include(api, generations_router, "generations")
_include(api, generations_internal_router, "generations.internal")
_include(api, workflows_router, "workflows")
_include(api, billing_router, "billing")
_include(api, billing_webhook_router, "billing.webhooks")


__all__ = ["api", "API_PREFIX"]

# Fin del archivo backend/app/routes/master_routes.py
