# -*- coding: utf-8 -*-
"""
backend/app/shared/database/repository.py

Repositorio base para operaciones async con SQLAlchemy.

Las sesiones usan expire_on_commit=False: un objeto ya cargado sigue en el
identity map con los valores que tenía al leerse. Para read-modify-write
sobre filas que otra request puede haber cambiado, usar get(..., fresh=True)
o get_for_update(), que recargan los atributos desde la base de datos.

Autor: Ixchel Beristain
Fecha: 2026-10-05
"""

from typing import Any, Type, TypeVar, Generic, Optional

from sqlalchemy.ext.asyncio import AsyncSession

T = TypeVar("T")  # modelo ORM


class BaseRepository(Generic[T]):
    """Repositorio asincrónico base (lecturas por clave primaria)."""

    def __init__(self, model: Type[T]):
        self.model = model

    async def get(self, session: AsyncSession, obj_id: Any, *, fresh: bool = False) -> Optional[T]:
        """
        Carga por PK. Con fresh=True ignora el estado cacheado en la sesión
        y sobrescribe el objeto con la fila actual.
        """
        return await session.get(self.model, obj_id, populate_existing=fresh)

    async def get_for_update(self, session: AsyncSession, obj_id: Any) -> Optional[T]:
        """
        SELECT ... FOR UPDATE por PK, siempre con datos frescos.

        En PostgreSQL bloquea la fila hasta el commit/rollback; sqlite
        ignora la cláusula (la escritura ya serializa la base completa).
        """
        return await session.get(
            self.model,
            obj_id,
            with_for_update=True,
            populate_existing=True,
        )

# Fin del archivo backend/app/shared/database/repository.py
