# -*- coding: utf-8 -*-
"""
backend/app/modules/billing/repositories.py

Repositorio de sesiones de checkout ya acreditadas.

Autor: Adlibify
Fecha: 2026-10-19
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database.repository import BaseRepository
from .models import ProcessedCheckoutSession


class ProcessedCheckoutSessionRepository(BaseRepository[ProcessedCheckoutSession]):
    model = ProcessedCheckoutSession

    async def get_by_session_id(
        self,
        session: AsyncSession,
        session_id: str,
    ) -> Optional[ProcessedCheckoutSession]:
        stmt = select(ProcessedCheckoutSession).where(ProcessedCheckoutSession.session_id == session_id)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()


__all__ = ["ProcessedCheckoutSessionRepository"]
