# -*- coding: utf-8 -*-
"""
backend/app/shared/database/database.py

SQLAlchemy async sobre asyncpg (PgBouncer / Supabase Postgres).
En tests el mismo módulo acepta sqlite+aiosqlite.

Provee:
- engine (create_async_engine)
- SessionLocal (async_sessionmaker)
- Dependencias FastAPI: get_async_session
- context manager: session_scope()
- check_database_health()
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator
from uuid import uuid4

from sqlalchemy import event, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool, StaticPool

from app.shared.config import settings

logger = logging.getLogger("uvicorn.error")

DB_CONNECT_TIMEOUT_S = 5.0
DB_COMMAND_TIMEOUT_S = 10.0


def _prepared_statement_name_func() -> str:
    # nombres únicos: PgBouncer en transaction mode no comparte prepared statements
    return f"__asyncpg_{uuid4().hex[:8]}__"


def _enable_sqlite_savepoints(async_engine: AsyncEngine) -> None:
    # el driver sqlite emite BEGIN por su cuenta y rompe SAVEPOINT;
    # se desactiva y SQLAlchemy emite el BEGIN
    @event.listens_for(async_engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(async_engine.sync_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")


def build_engine(url: str, echo: bool = False) -> AsyncEngine:
    """
    Crea el engine async según el dialecto de la URL.

    - postgresql+asyncpg: NullPool (el pool lo maneja PgBouncer),
      sin cache de prepared statements y con timeouts de conexión.
    - sqlite+aiosqlite en memoria: StaticPool para compartir la única conexión.
    """
    parsed = make_url(url)
    kwargs: dict[str, Any] = {"echo": echo}

    if parsed.get_backend_name() == "sqlite":
        if parsed.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool
        kwargs["connect_args"] = {"check_same_thread": False}
        sqlite_engine = create_async_engine(url, **kwargs)
        _enable_sqlite_savepoints(sqlite_engine)
        return sqlite_engine

    # asyncpg no entiende sslmode en la query; se traduce a connect_args
    query = dict(parsed.query)
    sslmode = query.pop("sslmode", None)
    parsed = parsed.set(query=query)

    connect_args: dict[str, Any] = {
        "statement_cache_size": 0,
        "prepared_statement_cache_size": 0,
        "prepared_statement_name_func": _prepared_statement_name_func,
        "server_settings": {"search_path": "public"},
        "timeout": DB_CONNECT_TIMEOUT_S,
        "command_timeout": DB_COMMAND_TIMEOUT_S,
    }
    if sslmode and sslmode != "disable":
        connect_args["ssl"] = sslmode

    return create_async_engine(
        parsed,
        poolclass=NullPool,
        pool_pre_ping=False,
        execution_options={"prepared_statement_cache_size": 0},
        connect_args=connect_args,
        **kwargs,
    )


engine = build_engine(settings.database_url, echo=settings.db_echo_sql)
logger.info("[DB] Engine inicializado (%s)", engine.url.render_as_string(hide_password=True))

# ── Session factory
SessionLocal = async_sessionmaker(
    bind=engine,
    expire_on_commit=False,
    class_=AsyncSession,
    autoflush=False,
)


# ── Dependencias FastAPI
async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    async with SessionLocal() as session:
        try:
            yield session
        except SQLAlchemyError:
            # rollback para liberar cualquier transacción/lock
            await session.rollback()
            raise
        finally:
            if session.in_transaction():
                await session.rollback()


# ── Context manager reutilizable en jobs/scripts
@asynccontextmanager
async def session_scope() -> AsyncGenerator[AsyncSession, None]:
    async with SessionLocal() as session:
        try:
            yield session
            # commit/rollback lo decide quien usa el scope
        finally:
            if session.in_transaction():
                await session.rollback()


# ── Health check
async def check_database_health(timeout_s: float = 3.0, sql: str = "SELECT 1") -> bool:
    """
    Verifica conectividad a la base de datos.

    Returns:
        True si la conexión es exitosa, False en caso contrario
    """
    try:
        async with asyncio.timeout(timeout_s):
            async with engine.connect() as conn:
                await conn.execute(text(sql))
        return True
    except (SQLAlchemyError, OSError, TimeoutError) as e:
        logger.warning("[DB] Health check falló: %s", e)
        return False


__all__ = [
    "engine",
    "SessionLocal",
    "build_engine",
    "get_async_session",
    "session_scope",
    "check_database_health",
]
# Fin del archivo backend/app/shared/database/database.py
