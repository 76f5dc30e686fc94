# -*- coding: utf-8 -*-
"""
backend/app/modules/refunds/repositories/enrollment_repository.py

Repositorio de inscripciones.

Autor: Ixchel Beristain
Fecha: 2026-10-07
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database.repository import BaseRepository
from app.modules.refunds.enums import EnrollmentStatus
from app.modules.refunds.models import Enrollment


class EnrollmentRepository(BaseRepository[Enrollment]):
    def __init__(self) -> None:
        super().__init__(Enrollment)

    async def get_for_user(
        self,
        session: AsyncSession,
        enrollment_id: str,
        user_id: str,
    ) -> Optional[Enrollment]:
        """Inscripción por id, acotada al usuario solicitante (siempre releída)."""
        stmt = (
            select(Enrollment)
            .where(
                Enrollment.id == enrollment_id,
                Enrollment.user_id == user_id,
            )
            .execution_options(populate_existing=True)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def mark_refunded(
        self,
        session: AsyncSession,
        enrollment_id: str,
        *,
        approved_by: str,
        reason: str,
        at: datetime,
    ) -> int:
        """
        Transición condicional active → refunded.

        Solo afecta a la fila si sigue activa; devuelve el número de filas
        afectadas (0 indica que otra liquidación ya la marcó).
        """
        stmt = (
            update(Enrollment)
            .where(
                Enrollment.id == enrollment_id,
                Enrollment.status == EnrollmentStatus.ACTIVE,
            )
            .values(
                status=EnrollmentStatus.REFUNDED,
                refund_requested_at=at,
                refund_approved_at=at,
                refund_approved_by=approved_by,
                refund_reason=reason,
                updated_at=at,
            )
        )
        result = await session.execute(stmt)
        await session.flush()
        return result.rowcount or 0


__all__ = ["EnrollmentRepository"]

# Fin del archivo backend/app/modules/refunds/repositories/enrollment_repository.py
