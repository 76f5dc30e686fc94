# -*- coding: utf-8 -*-
"""
backend/app/modules/refunds/enums/order_payment_status_enum.py

Estado de pago de una orden.
Transiciones: unpaid → paid → {refunded | partially_refunded}.

Autor: Ixchel Beristain
Fecha: 2026-10-07
"""

from enum import StrEnum

from sqlalchemy import Enum as SAEnum

from app.shared.database.base import as_db_enum


class OrderPaymentStatus(StrEnum):
    """Estado de pago de la orden."""

    UNPAID = "unpaid"
    PAID = "paid"
    PARTIALLY_REFUNDED = "partially_refunded"
    REFUNDED = "refunded"

    @classmethod
    def as_db_enum(cls, name: str = "order_payment_status_enum") -> SAEnum:
        return as_db_enum(cls, name=name)


__all__ = ["OrderPaymentStatus"]

# Fin del archivo backend/app/modules/refunds/enums/order_payment_status_enum.py
