# -*- coding: utf-8 -*-
"""
backend/app/routes/health_routes.py

Health checks del backend.

- GET /                  → info básica del servicio
- GET /api/health/live   → el proceso responde
- GET /api/health/ready  → además la base de datos responde (503 si no)

Autor: Adlibify
Fecha: 2026-10-19
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Response, status

from app.shared.config import settings
from app.shared.database.database import check_database_health

router = APIRouter()


@router.get("/", summary="Información del servicio")
async def root() -> dict:
    return {
        "service": settings.app_name,
        "version": settings.app_version,
        "environment": settings.python_env,
    }


@router.get("/api/health/live", summary="Liveness")
async def liveness() -> dict:
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


@router.get("/api/health/ready", summary="Readiness (incluye base de datos)")
async def readiness(response: Response) -> dict:
    db_ok = await check_database_health(timeout_s=2.0)
    if not db_ok:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return {
        "status": "ok" if db_ok else "degraded",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.python_env,
        "database": {
            "reachable": db_ok,
        },
    }

# Fin del archivo backend/app/routes/health_routes.py
