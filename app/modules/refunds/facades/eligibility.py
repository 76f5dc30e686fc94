# -*- coding: utf-8 -*-
"""
backend/app/modules/refunds/facades/eligibility.py

Evaluador de elegibilidad de reembolso.

Orden estricto de verificación (corta en la primera condición que descalifica):
  1. Enrollment del usuario (no existe → EnrollmentNotFoundError)
  2. Ya reembolsado → inelegible
  3. No activo / aprovisionamiento fallido → inelegible
  4. Orden (no existe → OrderNotFoundError)
  5. Ventana de días según tipo de producto
  6. Progreso agregado (solo informativo; falla → 0%)
  7. Límite de secciones (curso o bundle); fallas externas NO bloquean
  8. Línea de compra en la orden (no existe → PurchasedItemNotFoundError)
  9. Elegible, con desglose de monto y comisión

Las reglas con datos locales (ventana, estado) son estrictas; las
verificaciones contra la plataforma de aprendizaje son permisivas ante
fallas de infraestructura (se registran y se cuentan en Prometheus).

Autor: Ixchel Beristain
Fecha: 2026-10-09
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Callable, List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.refunds.adapters.learnworlds_client import IProgressLookup, SectionLimitResult
from app.modules.refunds.enums import EnrollmentOutcome, EnrollmentStatus, ProductType
from app.modules.refunds.errors import (
    EnrollmentNotFoundError,
    OrderNotFoundError,
    PurchasedItemNotFoundError,
)
from app.modules.refunds.metrics import (
    refund_eligibility_verdicts_total,
    refund_section_check_fail_open_total,
)
from app.modules.refunds.models import Enrollment, Order
from app.modules.refunds.policy import RefundBreakdown, RefundPolicy, compute_refund_breakdown
from app.modules.refunds.repositories import (
    BundleRepository,
    EnrollmentRepository,
    OrderRepository,
)
from app.modules.refunds.utils.datetime_helpers import days_elapsed, utcnow

logger = logging.getLogger(__name__)

ALREADY_REFUNDED_REASON = "This item has already been refunded."
INACTIVE_REASON = "Only active enrollments are eligible for refunds."
UNKNOWN_BUNDLE_COURSE_LABEL = "one of the bundle courses"


# ============================================================================
# VEREDICTO
# ============================================================================

@dataclass(frozen=True)
class EligibilityDetails:
    enrollment_id: str
    product_title: str
    purchase_date: Optional[datetime]
    days_elapsed: int
    progress_percent: float
    breakdown: RefundBreakdown

    @property
    def refund_amount(self) -> Decimal:
        """Monto bruto pagado; la comisión se aplica al liquidar."""
        return self.breakdown.original_amount


@dataclass(frozen=True)
class EligibilityVerdict:
    eligible: bool
    reason: Optional[str] = None
    details: Optional[EligibilityDetails] = None

    @classmethod
    def rejected(cls, reason: str) -> "EligibilityVerdict":
        return cls(eligible=False, reason=reason)


# ============================================================================
# MENSAJES
# ============================================================================

def describe_section(section_limit: int, result: SectionLimitResult) -> str:
    if result.violating_section is None:
        return f"section {section_limit + 1} or later"
    return result.violating_section.describe()


def window_expired_reason(product_type: ProductType, limit_days: int, elapsed: int) -> str:
    return (
        f"Refund requests for {product_type.plural_label} must be made within "
        f"{limit_days} days of purchase. Your purchase was {elapsed} days ago."
    )


def course_section_reason(section_limit: int, section: str) -> str:
    return (
        f"Refunds are only available before exploring beyond section {section_limit}. "
        f"Your LearnWorlds progress shows activity in {section}."
    )


def bundle_section_reason(section_limit: int, course_label: str, section: str) -> str:
    return (
        f"Bundle refunds are only available before exploring beyond section {section_limit} "
        f"of any included course. We detected activity in {course_label} - {section}."
    )


# ============================================================================
# EVALUADOR
# ============================================================================

class RefundEligibilityEvaluator:
    """
    Produce un EligibilityVerdict nuevo en cada llamada (sin caché).

    Las dependencias se inyectan al construir; los tests pasan una
    RefundPolicy y un IProgressLookup falsos.
    """

    def __init__(
        self,
        *,
        policy: RefundPolicy,
        progress: IProgressLookup,
        enrollment_repo: EnrollmentRepository,
        order_repo: OrderRepository,
        bundle_repo: BundleRepository,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.policy = policy
        self.progress = progress
        self.enrollment_repo = enrollment_repo
        self.order_repo = order_repo
        self.bundle_repo = bundle_repo
        self._clock = clock

    async def check_eligibility(
        self,
        session: AsyncSession,
        *,
        user_id: str,
        enrollment_id: str,
    ) -> EligibilityVerdict:
        enrollment = await self.enrollment_repo.get_for_user(session, enrollment_id, user_id)
        if enrollment is None:
            raise EnrollmentNotFoundError(enrollment_id)

        product_type = ProductType(enrollment.product_type)

        if enrollment.status == EnrollmentStatus.REFUNDED:
            return self._reject(product_type, "already_refunded", ALREADY_REFUNDED_REASON)

        if (
            enrollment.enrollment_status != EnrollmentOutcome.SUCCESS
            or enrollment.status != EnrollmentStatus.ACTIVE
        ):
            return self._reject(product_type, "inactive", INACTIVE_REASON)

        order = await self.order_repo.get(session, enrollment.order_id)
        if order is None:
            raise OrderNotFoundError(enrollment.order_id)

        # Ventana de reembolso
        purchased_at = order.paid_at or order.created_at
        elapsed = days_elapsed(purchased_at, self._clock())
        limit_days = self.policy.eligible_days_for(product_type)
        if elapsed > limit_days:
            return self._reject(
                product_type,
                "window_expired",
                window_expired_reason(product_type, limit_days, elapsed),
            )

        progress_percent = await self._display_progress(product_type, enrollment, order)

        # Límite de secciones por tipo de producto
        match product_type:
            case ProductType.COURSE:
                section_reason = await self._course_section_gate(enrollment, order)
            case ProductType.BUNDLE:
                section_reason = await self._bundle_section_gate(session, enrollment, order)
            case _:
                raise ValueError(f"Tipo de producto no soportado: {product_type!r}")

        if section_reason is not None:
            return self._reject(product_type, "section_limit", section_reason)

        purchased_item = order.find_purchased_item(enrollment.product_id)
        if purchased_item is None:
            raise PurchasedItemNotFoundError(order.id, enrollment.product_id)

        breakdown = compute_refund_breakdown(purchased_item.get("price"), self.policy)

        refund_eligibility_verdicts_total.labels(product_type.value, "eligible").inc()
        return EligibilityVerdict(
            eligible=True,
            details=EligibilityDetails(
                enrollment_id=enrollment.id,
                product_title=enrollment.product_title,
                purchase_date=purchased_at,
                days_elapsed=elapsed,
                progress_percent=progress_percent,
                breakdown=breakdown,
            ),
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _reject(product_type: ProductType, outcome: str, reason: str) -> EligibilityVerdict:
        refund_eligibility_verdicts_total.labels(product_type.value, outcome).inc()
        return EligibilityVerdict.rejected(reason)

    async def _display_progress(
        self,
        product_type: ProductType,
        enrollment: Enrollment,
        order: Order,
    ) -> float:
        """Progreso agregado del curso, solo para mostrar. Nunca bloquea."""
        if product_type != ProductType.COURSE or not enrollment.enroll_id:
            return 0.0

        result = await self.progress.get_course_progress(order.customer_email, enrollment.enroll_id)
        if not result.success or result.progress is None:
            logger.warning(
                "Progress unavailable for enrollment=%s, defaulting to 0: %s",
                enrollment.id,
                result.error,
            )
            return 0.0
        return float(result.progress)

    def _fail_open(self, product_type: ProductType, enrollment_id: str, label: str, error: Optional[str]) -> None:
        refund_section_check_fail_open_total.labels(product_type.value).inc()
        logger.warning(
            "Could not verify section-based eligibility for %s (enrollment=%s), allowing refund request: %s",
            label,
            enrollment_id,
            error,
        )

    async def _course_section_gate(self, enrollment: Enrollment, order: Order) -> Optional[str]:
        limit = self.policy.course_section_limit

        if not enrollment.enroll_id:
            self._fail_open(ProductType.COURSE, enrollment.id, "course", "missing enroll id")
            return None

        result = await self.progress.check_course_section_limit(
            order.customer_email,
            enrollment.enroll_id,
            section_limit=limit,
            unit_progress_rate_limit=self.policy.unit_progress_rate_limit,
        )
        if not result.success:
            self._fail_open(ProductType.COURSE, enrollment.id, "course", result.error)
            return None
        if result.exceeded_limit:
            return course_section_reason(limit, describe_section(limit, result))
        return None

    async def _bundle_children(self, session: AsyncSession, bundle_id: str) -> List[Tuple[str, str]]:
        """(course_id, enroll_id) de los cursos del bundle; ignora ids vacíos."""
        try:
            children = await self.bundle_repo.get_children(session, bundle_id)
        except SQLAlchemyError as e:
            logger.error("Failed to fetch bundle metadata for refund eligibility (bundle=%s): %s", bundle_id, e)
            return []

        entries: List[Tuple[str, str]] = []
        for course_id, enroll_id in children.items():
            enroll_id = enroll_id.strip() if isinstance(enroll_id, str) else ""
            if enroll_id:
                entries.append((course_id, enroll_id))
        return entries

    async def _bundle_section_gate(
        self,
        session: AsyncSession,
        enrollment: Enrollment,
        order: Order,
    ) -> Optional[str]:
        limit = self.policy.course_section_limit
        entries = await self._bundle_children(session, enrollment.product_id)
        if not entries:
            return None

        email = order.customer_email
        unique_ids = list(dict.fromkeys(enroll_id for _, enroll_id in entries))
        preloaded = await self.progress.fetch_user_course_section_progress_map(email, unique_ids)

        # Verificaciones independientes y de solo lectura: se ejecutan en paralelo
        results = await asyncio.gather(
            *(
                self.progress.check_course_section_limit(
                    email,
                    enroll_id,
                    section_limit=limit,
                    unit_progress_rate_limit=self.policy.unit_progress_rate_limit,
                    sections_override=preloaded.get(enroll_id),
                )
                for _, enroll_id in entries
            )
        )

        for (course_id, _), result in zip(entries, results):
            if result.success and result.exceeded_limit:
                label = course_id or UNKNOWN_BUNDLE_COURSE_LABEL
                return bundle_section_reason(limit, label, describe_section(limit, result))
            if not result.success:
                self._fail_open(ProductType.BUNDLE, enrollment.id, f"bundle course {course_id}", result.error)
        return None


__all__ = [
    "ALREADY_REFUNDED_REASON",
    "INACTIVE_REASON",
    "EligibilityDetails",
    "EligibilityVerdict",
    "RefundEligibilityEvaluator",
    "describe_section",
]

# Fin del archivo backend/app/modules/refunds/facades/eligibility.py
