# -*- coding: utf-8 -*-
"""
backend/app/modules/refunds/facades/__init__.py

Fachadas del módulo Refunds: elegibilidad y liquidación.
"""

from .eligibility import (
    ALREADY_REFUNDED_REASON,
    INACTIVE_REASON,
    EligibilityDetails,
    EligibilityVerdict,
    RefundEligibilityEvaluator,
)
from .reconciliation import ReconciliationReport, StepOutcome, StepStatus
from .settlement import RefundSettlementExecutor, SettlementResult

__all__ = [
    "ALREADY_REFUNDED_REASON",
    "INACTIVE_REASON",
    "EligibilityDetails",
    "EligibilityVerdict",
    "RefundEligibilityEvaluator",
    "ReconciliationReport",
    "StepOutcome",
    "StepStatus",
    "RefundSettlementExecutor",
    "SettlementResult",
]
