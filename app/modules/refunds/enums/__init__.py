# -*- coding: utf-8 -*-
"""
backend/app/modules/refunds/enums/__init__.py

Superficie de exportación de enums del módulo Refunds.

Incluye:
- ProductType
- EnrollmentStatus
- EnrollmentOutcome
- OrderPaymentStatus
- RefundEmailStatus

Autor: Ixchel Beristain
Fecha: 2026-10-07
"""

from .product_type_enum import ProductType
from .enrollment_status_enum import EnrollmentStatus, EnrollmentOutcome
from .order_payment_status_enum import OrderPaymentStatus
from .refund_email_status_enum import RefundEmailStatus

__all__ = [
    "ProductType",
    "EnrollmentStatus",
    "EnrollmentOutcome",
    "OrderPaymentStatus",
    "RefundEmailStatus",
]

# Fin del archivo backend/app/modules/refunds/enums/__init__.py
