# -*- coding: utf-8 -*-
"""
backend/app/modules/generations/repositories.py

Repositorio del ledger de generaciones.

Las transiciones de estado son compare-and-swap:
UPDATE ... WHERE id = :id AND status = 'processing'. Si otra escritura ya
llevó la fila a un estado terminal, el UPDATE no afecta filas y el llamador
lo detecta por rowcount.

Autor: Adlibify
Fecha: 2026-10-19
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.profiles.models import utcnow
from app.shared.database.repository import BaseRepository
from .enums import GenerationStatus
from .models import Generation

logger = logging.getLogger(__name__)


class GenerationRepository(BaseRepository[Generation]):
    model = Generation

    async def get_for_user(
        self,
        session: AsyncSession,
        generation_id: UUID,
        user_id: UUID,
    ) -> Optional[Generation]:
        stmt = select(Generation).where(
            Generation.id == generation_id,
            Generation.user_id == user_id,
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_for_user(
        self,
        session: AsyncSession,
        user_id: UUID,
        *,
        limit: int = 50,
        offset: int = 0,
    ) -> Sequence[Generation]:
        stmt = (
            select(Generation)
            .where(Generation.user_id == user_id)
            .order_by(Generation.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def delete_for_user(
        self,
        session: AsyncSession,
        generation_id: UUID,
        user_id: UUID,
    ) -> bool:
        stmt = (
            delete(Generation)
            .where(Generation.id == generation_id, Generation.user_id == user_id)
            .execution_options(synchronize_session="fetch")
        )
        result = await session.execute(stmt)
        return result.rowcount == 1

    async def complete(
        self,
        session: AsyncSession,
        generation_id: UUID,
        user_id: UUID,
        video_url: str,
    ) -> bool:
        """processing → completed con video_url y credits_used=1."""
        stmt = (
            update(Generation)
            .where(
                Generation.id == generation_id,
                Generation.user_id == user_id,
                Generation.status == GenerationStatus.PROCESSING,
            )
            .values(
                status=GenerationStatus.COMPLETED,
                video_url=video_url,
                credits_used=1,
                updated_at=utcnow(),
            )
            .execution_options(synchronize_session="fetch")
        )
        result = await session.execute(stmt)
        return result.rowcount == 1

    async def mark_failed(self, session: AsyncSession, generation_id: UUID) -> bool:
        """processing → failed."""
        stmt = (
            update(Generation)
            .where(
                Generation.id == generation_id,
                Generation.status == GenerationStatus.PROCESSING,
            )
            .values(status=GenerationStatus.FAILED, updated_at=utcnow())
            .execution_options(synchronize_session="fetch")
        )
        result = await session.execute(stmt)
        return result.rowcount == 1

    async def find_stale_ids(self, session: AsyncSession, cutoff: datetime) -> list[UUID]:
        """Ids de generaciones en processing creadas antes de `cutoff`."""
        stmt = select(Generation.id).where(
            Generation.status == GenerationStatus.PROCESSING,
            Generation.created_at < cutoff,
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())


__all__ = ["GenerationRepository"]
