# -*- coding: utf-8 -*-
"""
backend/app/modules/generations/jobs/reaper_job.py

Job programado que marca como 'failed' las generaciones que llevan
más de N minutos en 'processing' (webhook caído, workflow colgado, etc).

Cada fila se actualiza con compare-and-swap dentro de su propio savepoint:
un error en una fila no impide procesar las demás, y una fila que la
ingesta completó mientras tanto no se toca.

Autor: Adlibify
Fecha: 2026-10-19
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.observability.business_metrics import GENERATIONS_REAPED
from app.shared.database.database import session_scope
from app.shared.scheduler import get_scheduler
from ..repositories import GenerationRepository

logger = logging.getLogger(__name__)

# ID del job para referencia
GENERATION_REAPER_JOB_ID = "generations_fail_stuck"

DEFAULT_TIMEOUT_MINUTES = 15
DEFAULT_INTERVAL_MINUTES = 5


@dataclass
class ReaperResult:
    found: int
    updated: int

    @property
    def message(self) -> str:
        return f"Processed {self.found} stuck videos, updated {self.updated} to failed status"


async def fail_stuck_generations(
    timeout_minutes: int = DEFAULT_TIMEOUT_MINUTES,
    session: Optional[AsyncSession] = None,
    generation_repo: Optional[GenerationRepository] = None,
) -> ReaperResult:
    """
    Marca como 'failed' las generaciones en 'processing' creadas antes
    de now - timeout_minutes.

    Args:
        timeout_minutes: Minutos máximos en processing (default 15)
        session: Sesión async opcional (si no se provee, crea una nueva)

    Returns:
        ReaperResult con filas encontradas y filas efectivamente actualizadas
    """
    repo = generation_repo or GenerationRepository()
    cutoff = datetime.now(timezone.utc) - timedelta(minutes=timeout_minutes)

    async def _do_reap(sess: AsyncSession) -> ReaperResult:
        stale_ids = await repo.find_stale_ids(sess, cutoff)
        updated = 0
        for generation_id in stale_ids:
            try:
                async with sess.begin_nested():
                    if await repo.mark_failed(sess, generation_id):
                        updated += 1
            except SQLAlchemyError as e:
                logger.error("Reaper could not fail generation %s: %s", generation_id, e)
        await sess.commit()
        return ReaperResult(found=len(stale_ids), updated=updated)

    if session is not None:
        result = await _do_reap(session)
    else:
        async with session_scope() as sess:
            result = await _do_reap(sess)

    if result.updated:
        GENERATIONS_REAPED.inc(result.updated)
    if result.found:
        logger.info(
            "%s (timeout=%d min, cutoff=%s)",
            result.message, timeout_minutes, cutoff.isoformat(),
        )
    else:
        logger.debug("No stuck generations (cutoff=%s)", cutoff.isoformat())
    return result


def register_generation_reaper_job(
    interval_minutes: int = DEFAULT_INTERVAL_MINUTES,
    timeout_minutes: int = DEFAULT_TIMEOUT_MINUTES,
) -> str:
    """Registra el reaper en el scheduler global."""
    scheduler = get_scheduler()
    job_id = scheduler.add_interval_job(
        fail_stuck_generations,
        job_id=GENERATION_REAPER_JOB_ID,
        minutes=interval_minutes,
        timeout_minutes=timeout_minutes,
    )
    logger.info(
        "Generation reaper registered: every %d min, timeout %d min",
        interval_minutes, timeout_minutes,
    )
    return job_id


__all__ = [
    "GENERATION_REAPER_JOB_ID",
    "ReaperResult",
    "fail_stuck_generations",
    "register_generation_reaper_job",
]
# Fin del archivo backend/app/modules/generations/jobs/reaper_job.py
