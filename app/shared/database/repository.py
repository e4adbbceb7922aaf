# -*- coding: utf-8 -*-
"""
backend/app/shared/database/repository.py

Repositorio base para operaciones async con SQLAlchemy.
Los repositorios de módulo heredan de aquí y añaden sus escrituras
condicionales (créditos, transiciones de estado).

Autor: Adlibify
Fecha: 2026-10-19
"""

from typing import Any, Type, TypeVar, Generic, Optional

from sqlalchemy.ext.asyncio import AsyncSession

T = TypeVar("T")  # modelo ORM


class BaseRepository(Generic[T]):
    """Repositorio asincrónico base para CRUD común."""

    model: Type[T]

    def __init__(self, model: Optional[Type[T]] = None):
        if model is not None:
            self.model = model

    async def get(self, session: AsyncSession, obj_id: Any) -> Optional[T]:
        return await session.get(self.model, obj_id)

    async def create(self, session: AsyncSession, **kwargs) -> T:
        obj = self.model(**kwargs)
        session.add(obj)
        await session.flush()
        return obj

    async def delete(self, session: AsyncSession, obj: T) -> None:
        await session.delete(obj)
        await session.flush()

# Fin del archivo backend\app\shared\database\repository.py
