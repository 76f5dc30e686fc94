# -*- coding: utf-8 -*-
"""
backend/app/modules/refunds/policy.py

Política de reembolsos (valor inmutable) y aritmética de comisión.

RefundPolicy se construye una vez desde settings y se inyecta en el
evaluador de elegibilidad y en el ejecutor de liquidación; los tests
pasan políticas alternativas sin tocar estado global.

Aritmética en centavos enteros:
    paid_cents   = round(price * 100)
    fee_cents    = round(paid_cents * fee_percent) si aplica comisión, si no 0
    refund_cents = max(0, paid_cents - fee_cents)

El redondeo es half-up (el mismo que Math.round para montos positivos).

Autor: Ixchel Beristain
Fecha: 2026-10-07
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING, Union

from app.modules.refunds.enums import ProductType

if TYPE_CHECKING:
    from app.shared.config.settings_base import BaseAppSettings

DEFAULT_REFUND_REASON = "User requested refund"

_CENT = Decimal("0.01")


@dataclass(frozen=True)
class RefundPolicy:
    course_eligible_days: int = 3
    bundle_eligible_days: int = 6
    course_section_limit: int = 2
    unit_progress_rate_limit: float = 0.0
    apply_processing_fee: bool = False
    processing_fee_percent: float = 0.05
    default_refund_reason: str = DEFAULT_REFUND_REASON

    @classmethod
    def from_settings(cls, settings: BaseAppSettings) -> "RefundPolicy":
        return cls(
            course_eligible_days=settings.refund_course_eligible_days,
            bundle_eligible_days=settings.refund_bundle_eligible_days,
            course_section_limit=settings.refund_course_section_limit,
            unit_progress_rate_limit=settings.refund_unit_progress_rate_limit,
            apply_processing_fee=settings.refund_apply_processing_fee,
            processing_fee_percent=settings.refund_processing_fee_percent,
        )

    def eligible_days_for(self, product_type: ProductType) -> int:
        """Ventana de días según el tipo de producto."""
        if product_type == ProductType.BUNDLE:
            return self.bundle_eligible_days
        return self.course_eligible_days


@dataclass(frozen=True)
class RefundBreakdown:
    """Desglose del reembolso en centavos enteros."""

    paid_cents: int
    fee_cents: int
    refund_cents: int
    fee_applied: bool
    fee_percent: float

    @staticmethod
    def _to_units(cents: int) -> Decimal:
        return (Decimal(cents) / 100).quantize(_CENT, rounding=ROUND_HALF_UP)

    @property
    def original_amount(self) -> Decimal:
        return self._to_units(self.paid_cents)

    @property
    def fee_amount(self) -> Decimal:
        return self._to_units(self.fee_cents)

    @property
    def amount(self) -> Decimal:
        """Monto neto a reembolsar en unidades de moneda (2 decimales)."""
        return self._to_units(self.refund_cents)


def _round_half_up(value: Decimal) -> int:
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def compute_refund_breakdown(
    price: Union[int, float, str, Decimal, None],
    policy: RefundPolicy,
) -> RefundBreakdown:
    """
    Calcula el desglose de reembolso para un precio pagado.

    Examples:
        >>> p = RefundPolicy(apply_processing_fee=True, processing_fee_percent=0.05)
        >>> b = compute_refund_breakdown(100, p)
        >>> (b.paid_cents, b.fee_cents, b.refund_cents, str(b.amount))
        (10000, 500, 9500, '95.00')
    """
    # str() evita arrastrar el error binario de floats como 19.99
    paid_cents = _round_half_up(Decimal(str(price or 0)) * 100)
    fee_cents = 0
    if policy.apply_processing_fee:
        fee_cents = _round_half_up(Decimal(paid_cents) * Decimal(str(policy.processing_fee_percent or 0)))
    refund_cents = max(0, paid_cents - fee_cents)

    return RefundBreakdown(
        paid_cents=paid_cents,
        fee_cents=fee_cents,
        refund_cents=refund_cents,
        fee_applied=policy.apply_processing_fee,
        fee_percent=policy.processing_fee_percent,
    )


__all__ = [
    "DEFAULT_REFUND_REASON",
    "RefundPolicy",
    "RefundBreakdown",
    "compute_refund_breakdown",
]

# Fin del archivo backend/app/modules/refunds/policy.py
