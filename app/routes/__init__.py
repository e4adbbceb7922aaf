# -*- coding: utf-8 -*-
"""
backend/app/routes/__init__.py

Ensamblador principal de ruteadores (`from app.routes import router`).

- Health y raíz sin prefijo adicional.
- Routers de módulo bajo /api (master_routes.py).

Autor: Adlibify
Fecha: 2026-10-19
"""

from fastapi import APIRouter

from .health_routes import router as health_router
from .master_routes import api

router = APIRouter()

router.include_router(health_router)
router.include_router(api)

__all__ = ["router"]

# Fin del archivo backend/app/routes/__init__.py
