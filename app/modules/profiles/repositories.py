# -*- coding: utf-8 -*-
"""
backend/app/modules/profiles/repositories.py

Repositorio de perfiles.

Las escrituras de saldo son sentencias UPDATE únicas que ejecuta la base
de datos (credits = credits + N / credits = credits - 1 WHERE credits > 0):
no hay lectura previa en Python, por lo que dos requests concurrentes no
pueden pisarse el saldo.

Autor: Adlibify
Fecha: 2026-10-19
"""

from __future__ import annotations

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database.repository import BaseRepository
from .models import Profile, utcnow

logger = logging.getLogger(__name__)


class ProfileRepository(BaseRepository[Profile]):
    model = Profile

    async def get_by_id(self, session: AsyncSession, user_id: UUID) -> Optional[Profile]:
        return await session.get(Profile, user_id)

    async def get_credits(self, session: AsyncSession, user_id: UUID) -> Optional[int]:
        """Saldo leído directo de la tabla (ignora el identity map)."""
        result = await session.execute(select(Profile.credits).where(Profile.id == user_id))
        return result.scalar_one_or_none()

    async def add_credits(self, session: AsyncSession, user_id: UUID, amount: int) -> Optional[int]:
        """
        Incrementa el saldo en `amount` con un único UPDATE.

        Returns:
            Saldo resultante, o None si el perfil no existe.
        """
        if amount <= 0:
            raise ValueError("amount must be positive")

        stmt = (
            update(Profile)
            .where(Profile.id == user_id)
            .values(credits=Profile.credits + amount, updated_at=utcnow())
            .execution_options(synchronize_session="fetch")
        )
        result = await session.execute(stmt)
        if result.rowcount == 0:
            return None
        return await self.get_credits(session, user_id)

    async def debit_one_credit(self, session: AsyncSession, user_id: UUID) -> bool:
        """
        Decrementa un crédito solo si el saldo es > 0.

        Returns:
            True si se debitó; False si el saldo ya era 0 o no hay perfil.
        """
        stmt = (
            update(Profile)
            .where(Profile.id == user_id, Profile.credits > 0)
            .values(credits=Profile.credits - 1, updated_at=utcnow())
            .execution_options(synchronize_session="fetch")
        )
        result = await session.execute(stmt)
        return result.rowcount == 1


__all__ = ["ProfileRepository"]
