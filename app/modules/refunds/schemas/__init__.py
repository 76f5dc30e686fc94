# -*- coding: utf-8 -*-
"""
backend/app/modules/refunds/schemas/__init__.py

Esquemas del módulo Refunds.
"""

from .refund_schemas import (
    EligibilityCheckRequest,
    RefundProcessRequest,
    EligibilityDetailsOut,
    EligibilityCheckResponse,
    RefundProcessResponse,
)

__all__ = [
    "EligibilityCheckRequest",
    "RefundProcessRequest",
    "EligibilityDetailsOut",
    "EligibilityCheckResponse",
    "RefundProcessResponse",
]
