# -*- coding: utf-8 -*-
"""
backend/app/modules/refunds/facades/reconciliation.py

Reporte de los pasos best-effort de una liquidación.

Una vez emitido el reembolso en el procesador, cada paso posterior
(revocar acceso, actualizar enrollment, actualizar orden, notificar)
se ejecuta de forma independiente. Sus resultados se acumulan aquí para
que un operador pueda conciliar lo que no se completó.

Autor: Ixchel Beristain
Fecha: 2026-10-09
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import List, Optional


class StepStatus(StrEnum):
    OK = "ok"
    WARNING = "warning"  # completado con anomalía (p.ej. 0 filas afectadas)
    FAILED = "failed"


@dataclass(frozen=True)
class StepOutcome:
    step: str
    status: StepStatus
    detail: Optional[str] = None


@dataclass
class ReconciliationReport:
    enrollment_id: str
    refund_id: str
    steps: List[StepOutcome] = field(default_factory=list)

    def record(self, step: str, status: StepStatus, detail: Optional[str] = None) -> None:
        self.steps.append(StepOutcome(step=step, status=status, detail=detail))

    def status_of(self, step: str) -> Optional[StepStatus]:
        for outcome in self.steps:
            if outcome.step == step:
                return outcome.status
        return None

    @property
    def failed_steps(self) -> List[str]:
        return [o.step for o in self.steps if o.status == StepStatus.FAILED]

    @property
    def needs_attention(self) -> bool:
        return any(o.status != StepStatus.OK for o in self.steps)

    def summary(self) -> str:
        return ", ".join(f"{o.step}={o.status.value}" for o in self.steps)


__all__ = ["StepStatus", "StepOutcome", "ReconciliationReport"]

# Fin del archivo backend/app/modules/refunds/facades/reconciliation.py
