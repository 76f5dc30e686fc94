# -*- coding: utf-8 -*-
"""
backend/app/modules/refunds/adapters/__init__.py

Adaptadores externos del módulo Refunds:
- StripeRefundAdapter (procesador de pagos)
- LearnWorldsClient (progreso y revocación de acceso)
"""

from .stripe_refund_adapter import (
    IPaymentProcessor,
    ProcessorRefund,
    StripeRefundAdapter,
    refund_idempotency_key,
)
from .learnworlds_client import (
    IProgressLookup,
    LearnWorldsClient,
    ProgressResult,
    SectionLimitResult,
    SectionProgress,
    SectionsResult,
    UnenrollResult,
    UnitProgress,
    ViolatingSection,
)

__all__ = [
    "IPaymentProcessor",
    "ProcessorRefund",
    "StripeRefundAdapter",
    "refund_idempotency_key",
    "IProgressLookup",
    "LearnWorldsClient",
    "ProgressResult",
    "SectionLimitResult",
    "SectionProgress",
    "SectionsResult",
    "UnenrollResult",
    "UnitProgress",
    "ViolatingSection",
]
