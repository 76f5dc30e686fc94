# -*- coding: utf-8 -*-
"""
backend/app/modules/refunds/models/order_models.py

Modelo Order: una transacción de checkout que puede cubrir varios productos.

Invariantes:
- purchased_items se fija al crear la orden y no se modifica después.
- refunded_items crece de forma monótona (una entrada por reembolso liquidado)
  y cada product_id debe existir en purchased_items.
- refund_amount es la suma de los montos de refunded_items.

Autor: Ixchel Beristain
Fecha: 2026-10-07
"""

from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy import DateTime, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column

from app.shared.database.base import Base, JSONType
from app.modules.refunds.enums import OrderPaymentStatus


class Order(Base):
    __tablename__ = "orders"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    order_number: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)

    stripe_payment_intent_id: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    payment_status: Mapped[OrderPaymentStatus] = mapped_column(
        OrderPaymentStatus.as_db_enum(),
        nullable=False,
        default=OrderPaymentStatus.UNPAID,
    )

    customer_email: Mapped[str] = mapped_column(String(320), nullable=False)
    customer_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    # [{product_id, enroll_id, product_type, lw_product_type, title, price,
    #   original_price, validity_duration, validity_type}]
    purchased_items: Mapped[List[Dict[str, Any]]] = mapped_column(JSONType, nullable=False, default=list)

    paid_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    # [{product_id, product_type, product_title, refund_amount, refunded_at, enrollment_id}]
    refunded_items: Mapped[List[Dict[str, Any]]] = mapped_column(JSONType, nullable=False, default=list)
    refund_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, default=Decimal("0"))
    refunded_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
    refund_reason: Mapped[Optional[str]] = mapped_column(String(1000))
    refund_processed_by: Mapped[Optional[str]] = mapped_column(String(128))

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    def find_purchased_item(self, product_id: str) -> Optional[Dict[str, Any]]:
        """Línea de compra cuyo product_id coincide, o None."""
        for item in self.purchased_items or []:
            if item.get("product_id") == product_id:
                return item
        return None

    def __repr__(self) -> str:
        return f"<Order id={self.id} number={self.order_number} status={self.payment_status}>"


__all__ = ["Order"]

# Fin del archivo backend/app/modules/refunds/models/order_models.py
