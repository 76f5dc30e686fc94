# -*- coding: utf-8 -*-
"""
backend/app/modules/refunds/metrics/collectors.py

Coleccionistas Prometheus para el flujo de reembolsos.

Define contadores para:
- Veredictos de elegibilidad por resultado
- Verificaciones de sección que no pudieron completarse (fail-open)
- Resultados de liquidación
- Fallas de pasos best-effort posteriores al cobro

Autor: Ixchel Beristain
Fecha: 2026-10-08
"""
from prometheus_client import Counter

NAMESPACE = "coursestore"
SUBSYSTEM = "refunds"

# Veredictos de elegibilidad
refund_eligibility_verdicts_total = Counter(
    f"{NAMESPACE}_{SUBSYSTEM}_eligibility_verdicts_total",
    "Refund eligibility verdicts",
    labelnames=("product_type", "outcome"),  # eligible|already_refunded|inactive|window_expired|section_limit
)

# Verificaciones de progreso fallidas que no bloquearon al usuario
refund_section_check_fail_open_total = Counter(
    f"{NAMESPACE}_{SUBSYSTEM}_section_check_fail_open_total",
    "Section-limit checks that failed and were allowed through",
    labelnames=("product_type",),
)

# Resultado de la liquidación
refund_settlements_total = Counter(
    f"{NAMESPACE}_{SUBSYSTEM}_settlements_total",
    "Refund settlement attempts",
    labelnames=("outcome",),  # succeeded|processor_failed|already_refunded
)

# Pasos best-effort fallidos tras emitir el reembolso
refund_reconciliation_failures_total = Counter(
    f"{NAMESPACE}_{SUBSYSTEM}_reconciliation_failures_total",
    "Post-payment settlement steps that failed",
    labelnames=("step",),  # revoke_access|update_enrollment|update_order|notify
)

__all__ = [
    "refund_eligibility_verdicts_total",
    "refund_section_check_fail_open_total",
    "refund_settlements_total",
    "refund_reconciliation_failures_total",
]

# Fin del archivo
