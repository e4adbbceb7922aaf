# -*- coding: utf-8 -*-
"""
backend/app/shared/database/__init__.py

Re-exporta utilidades comunes de base de datos.

Autor: Adlibify
Fecha: 2026-10-19
"""

from __future__ import annotations

from .database import (
    engine,
    SessionLocal,
    build_engine,
    get_async_session,
    session_scope,
    check_database_health,
)
from .base import Base, NAMING_CONVENTION, as_str_enum
from .repository import BaseRepository

__all__ = [
    "engine",
    "SessionLocal",
    "build_engine",
    "Base",
    "NAMING_CONVENTION",
    "as_str_enum",
    "BaseRepository",
    "get_async_session",
    "session_scope",
    "check_database_health",
]

# Fin del archivo backend/app/shared/database/__init__.py
