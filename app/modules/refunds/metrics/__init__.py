# -*- coding: utf-8 -*-
"""
backend/app/modules/refunds/metrics/__init__.py

Métricas Prometheus del módulo Refunds.
"""

from .collectors import (
    refund_eligibility_verdicts_total,
    refund_section_check_fail_open_total,
    refund_settlements_total,
    refund_reconciliation_failures_total,
)

__all__ = [
    "refund_eligibility_verdicts_total",
    "refund_section_check_fail_open_total",
    "refund_settlements_total",
    "refund_reconciliation_failures_total",
]
