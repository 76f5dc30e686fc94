# -*- coding: utf-8 -*-
"""
backend/app/shared/database/database.py

SQLAlchemy async sobre asyncpg (PostgreSQL). En pruebas acepta una URL
sqlite+aiosqlite para trabajar en memoria.

Provee:
- engine (create_async_engine)
- SessionLocal (async_sessionmaker)
- Dependencia FastAPI: get_async_session
- check_database_health()

Autor: Ixchel Beristain
Fecha: 2026-10-05
"""

from __future__ import annotations

import asyncio
import logging
import ssl
from typing import Any, AsyncGenerator, Dict

from sqlalchemy import text
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from app.shared.config import settings
from app.shared.database.base import Base  # reutilizamos la Base única

logger = logging.getLogger(__name__)

# Timeouts de conexión/consulta (segundos)
DB_CONNECT_TIMEOUT_S: float = 5.0
DB_COMMAND_TIMEOUT_S: float = 10.0


def _build_connect_args(url: str) -> Dict[str, Any]:
    """
    Argumentos de conexión por dialecto:
    - asyncpg: sin statement cache (compatible con PgBouncer) y timeouts.
    - sqlite: sin argumentos extra.
    """
    if url.startswith("sqlite"):
        return {}

    connect_args: Dict[str, Any] = {
        "statement_cache_size": 0,
        "timeout": DB_CONNECT_TIMEOUT_S,
        "command_timeout": DB_COMMAND_TIMEOUT_S,
    }
    if settings.db_sslmode == "require":
        connect_args["ssl"] = ssl.create_default_context(purpose=ssl.Purpose.SERVER_AUTH)
    return connect_args


DATABASE_URL = settings.database_url

logger.debug("[DB] Engine configurado (echo=%s)", settings.db_echo_sql)

# ── Engine (sin pool app-side; el pooling lo maneja PgBouncer)
engine = create_async_engine(
    DATABASE_URL,
    poolclass=NullPool,
    echo=settings.db_echo_sql,
    connect_args=_build_connect_args(DATABASE_URL),
)

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
        except (OperationalError, SQLAlchemyError):
            # rollback para liberar cualquier transacción/lock
            await session.rollback()
            raise
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
    except (OSError, SQLAlchemyError, TimeoutError) as e:
        logger.warning("[DB] Health check falló: %s", e)
        return False


__all__ = [
    "engine",
    "SessionLocal",
    "Base",
    "get_async_session",
    "check_database_health",
]
# Fin del archivo backend/app/shared/database/database.py
