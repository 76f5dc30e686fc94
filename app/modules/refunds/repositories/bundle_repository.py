# -*- coding: utf-8 -*-
"""
backend/app/modules/refunds/repositories/bundle_repository.py

Repositorio de bundles (solo lectura).

Autor: Ixchel Beristain
Fecha: 2026-10-07
"""

from __future__ import annotations

from typing import Dict

from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database.repository import BaseRepository
from app.modules.refunds.models import Bundle


class BundleRepository(BaseRepository[Bundle]):
    def __init__(self) -> None:
        super().__init__(Bundle)

    async def get_children(self, session: AsyncSession, bundle_id: str) -> Dict[str, str]:
        """
        Mapa id de curso → enroll id en la plataforma de aprendizaje.
        Bundle inexistente o sin hijos → {}.
        """
        bundle = await self.get(session, bundle_id)
        if bundle is None or not bundle.lw_bundle_children:
            return {}
        return dict(bundle.lw_bundle_children)


__all__ = ["BundleRepository"]

# Fin del archivo backend/app/modules/refunds/repositories/bundle_repository.py
