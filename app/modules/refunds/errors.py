# -*- coding: utf-8 -*-
"""
backend/app/modules/refunds/errors.py

Excepciones de dominio del flujo de reembolsos.

La inelegibilidad por política NO es una excepción: es un veredicto
negativo normal. Aquí solo viven las fallas duras:
- NotFoundError (404): enrollment, orden o línea de compra inexistente.
- EnrollmentAlreadyRefundedError (409): la inscripción ya está reembolsada.
- PaymentProviderError (500): falló la emisión del reembolso en el procesador.

Autor: Ixchel Beristain
Fecha: 2026-10-07
"""

from __future__ import annotations

from typing import Optional


class RefundError(Exception):
    """Base de errores del módulo de reembolsos."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(RefundError):
    pass


class EnrollmentNotFoundError(NotFoundError):
    def __init__(self, enrollment_id: str):
        super().__init__("Enrollment not found")
        self.enrollment_id = enrollment_id


class OrderNotFoundError(NotFoundError):
    def __init__(self, order_id: Optional[str]):
        super().__init__("Order not found")
        self.order_id = order_id


class PurchasedItemNotFoundError(NotFoundError):
    def __init__(self, order_id: str, product_id: str):
        super().__init__("Purchase item not found")
        self.order_id = order_id
        self.product_id = product_id


class EnrollmentAlreadyRefundedError(RefundError):
    """La inscripción ya fue liquidada; no se vuelve a llamar al procesador."""

    def __init__(self, enrollment_id: str):
        super().__init__("This item has already been refunded.")
        self.enrollment_id = enrollment_id


class PaymentProviderError(RefundError):
    """La llamada al procesador de pagos falló; no se mutó estado local."""

    def __init__(self, details: str):
        super().__init__("Refund processing failed")
        self.details = details


__all__ = [
    "RefundError",
    "NotFoundError",
    "EnrollmentNotFoundError",
    "OrderNotFoundError",
    "PurchasedItemNotFoundError",
    "EnrollmentAlreadyRefundedError",
    "PaymentProviderError",
]
