# -*- coding: utf-8 -*-
"""
backend/app/modules/generations/internal_routes.py

Endpoints internos (APP_SERVICE_TOKEN) para operar el reaper desde un
cron externo y consultar el estado del scheduler.

Autor: Adlibify
Fecha: 2026-10-19
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.config import settings
from app.shared.database.database import get_async_session
from app.shared.internal_auth import InternalServiceAuth
from app.shared.scheduler import get_scheduler
from .jobs import fail_stuck_generations
from .schemas import ReaperResponse

router = APIRouter(prefix="/internal", tags=["internal"])


@router.post("/generations/reap-stale", response_model=ReaperResponse)
async def reap_stale_generations(
    _auth: InternalServiceAuth,
    session: AsyncSession = Depends(get_async_session),
):
    result = await fail_stuck_generations(
        timeout_minutes=settings.generation_timeout_minutes,
        session=session,
    )
    return ReaperResponse(message=result.message, found=result.found, updated=result.updated)


@router.get("/scheduler/jobs")
async def list_scheduler_jobs(_auth: InternalServiceAuth):
    scheduler = get_scheduler()
    return {
        "running": scheduler.is_running,
        "jobs": [
            {**job, "next_run": job["next_run"].isoformat() if job["next_run"] else None}
            for job in scheduler.get_jobs()
        ],
    }


__all__ = ["router"]
