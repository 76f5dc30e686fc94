# -*- coding: utf-8 -*-
"""
backend/app/modules/refunds/repositories/order_repository.py

Repositorio de órdenes.

Autor: Ixchel Beristain
Fecha: 2026-10-07
"""

from __future__ import annotations

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.database.repository import BaseRepository
from app.modules.refunds.enums import OrderPaymentStatus
from app.modules.refunds.models import Order


class OrderRepository(BaseRepository[Order]):
    def __init__(self) -> None:
        super().__init__(Order)

    async def record_refund(
        self,
        session: AsyncSession,
        order_id: str,
        *,
        refund_item: Dict[str, Any],
        reason: str,
        processed_by: str,
        at: datetime,
    ) -> Optional[OrderPaymentStatus]:
        """
        Agrega una entrada a refunded_items y recalcula el estado de pago.

        Relee la orden con FOR UPDATE: otra liquidación de la misma orden
        puede haber agregado entradas desde que se cargó en esta sesión.

        - Idempotente por enrollment_id: si ya existe entrada, no se duplica.
        - refund_amount = suma de refund_amount de todas las entradas.
        - payment_status = refunded si se reembolsaron todas las líneas,
          si no partially_refunded.

        Returns:
            Estado de pago resultante, o None si la orden no existe.
        """
        order = await self.get_for_update(session, order_id)
        if order is None:
            return None

        existing = list(order.refunded_items or [])
        already_recorded = any(
            entry.get("enrollment_id") == refund_item.get("enrollment_id")
            for entry in existing
        )
        if already_recorded:
            return order.payment_status

        refunded_items = existing + [refund_item]
        total = sum(
            (Decimal(str(entry.get("refund_amount") or 0)) for entry in refunded_items),
            Decimal("0"),
        ).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)

        purchased_count = len(order.purchased_items or [])
        if len(refunded_items) == purchased_count:
            status = OrderPaymentStatus.REFUNDED
        else:
            status = OrderPaymentStatus.PARTIALLY_REFUNDED

        # Reasignar la lista (no mutar in-place) para que el ORM detecte el cambio
        order.refunded_items = refunded_items
        order.refund_amount = total
        order.refunded_at = at
        order.refund_reason = reason
        order.refund_processed_by = processed_by
        order.payment_status = status

        await session.flush()
        return status


__all__ = ["OrderRepository"]

# Fin del archivo backend/app/modules/refunds/repositories/order_repository.py
