# -*- coding: utf-8 -*-
"""
backend/app/modules/refunds/schemas/refund_schemas.py

Esquemas Pydantic v2 de los endpoints de reembolso.

El frontend envía y recibe camelCase (enrollmentId, refundReason,
daysElapsed...); internamente se usa snake_case vía alias_generator.

Autor: Ixchel Beristain
Fecha: 2026-10-08
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


# ----------------------------------------------------------------------------
# Requests
# ----------------------------------------------------------------------------

class EligibilityCheckRequest(_CamelModel):
    # Opcional a nivel de esquema: la ausencia responde 400 (no 422)
    enrollment_id: Optional[str] = None


class RefundProcessRequest(_CamelModel):
    enrollment_id: Optional[str] = None
    refund_reason: Optional[str] = Field(default=None, max_length=1000)


# ----------------------------------------------------------------------------
# Responses
# ----------------------------------------------------------------------------

class EligibilityDetailsOut(_CamelModel):
    enrollment_id: str
    product_title: str
    purchase_date: Optional[str] = None
    days_elapsed: int
    progress_percent: float
    refund_amount: float = Field(..., description="Precio bruto pagado (sin comisión)")
    original_amount: float
    processing_fee_applied: bool
    processing_fee_percent: float
    processing_fee_amount: float
    estimated_refund_amount: float = Field(..., description="Monto neto estimado tras la comisión")


class EligibilityCheckResponse(_CamelModel):
    eligible: bool
    reason: Optional[str] = None
    details: Optional[EligibilityDetailsOut] = None


class RefundProcessResponse(_CamelModel):
    success: bool = True
    refund_id: str
    amount: float


__all__ = [
    "EligibilityCheckRequest",
    "RefundProcessRequest",
    "EligibilityDetailsOut",
    "EligibilityCheckResponse",
    "RefundProcessResponse",
]

# Fin del archivo backend/app/modules/refunds/schemas/refund_schemas.py
