# -*- coding: utf-8 -*-
"""
backend/app/modules/refunds/facades/settlement.py

Ejecutor de liquidación de reembolsos.

Flujo:
  Paso crítico
    1. Cargar enrollment (del usuario), orden y línea de compra → 404 si falta;
       si la inscripción ya está reembolsada → 409 sin llamar al procesador
    2. Calcular desglose (centavos, comisión opcional)
    3. Emitir reembolso en el procesador (idempotency key por enrollment)
       → si falla: PaymentProviderError, sin mutar estado local
  Pasos best-effort (cada uno independiente, en este orden)
    4. revoke_access      → unenroll en la plataforma de aprendizaje
    5. update_enrollment  → active → refunded (condicional)
    6. update_order       → refunded_items, refund_amount, payment_status
    7. notify             → correo "processing" al cliente

Una falla en 4-7 se registra en ERROR, se cuenta en Prometheus y se anota
en el ReconciliationReport; el reembolso ya emitido NO se revierte.

La liquidación no vuelve a evaluar la elegibilidad completa (ventana,
progreso): el endpoint de elegibilidad es el filtro previo. Una inscripción ya
reembolsada se rechaza antes del procesador (la idempotency key de Stripe
vence a las 24 h).
Dos liquidaciones simultáneas que leen la inscripción activa convergen por
la idempotency key y la actualización condicional.

Autor: Ixchel Beristain
Fecha: 2026-10-09
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Awaitable, Callable, List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.refunds.adapters.learnworlds_client import IProgressLookup
from app.modules.refunds.adapters.stripe_refund_adapter import (
    IPaymentProcessor,
    ProcessorRefund,
    refund_idempotency_key,
)
from app.modules.refunds.enums import EnrollmentStatus, ProductType, RefundEmailStatus
from app.modules.refunds.errors import (
    EnrollmentAlreadyRefundedError,
    EnrollmentNotFoundError,
    OrderNotFoundError,
    PaymentProviderError,
    PurchasedItemNotFoundError,
)
from app.modules.refunds.facades.reconciliation import ReconciliationReport, StepStatus
from app.modules.refunds.metrics import (
    refund_reconciliation_failures_total,
    refund_settlements_total,
)
from app.modules.refunds.policy import RefundBreakdown, RefundPolicy, compute_refund_breakdown
from app.modules.refunds.repositories import EnrollmentRepository, OrderRepository
from app.modules.refunds.utils.datetime_helpers import to_iso8601, utcnow
from app.shared.integrations.email_sender import IEmailSender

logger = logging.getLogger(__name__)

STEP_REVOKE_ACCESS = "revoke_access"
STEP_UPDATE_ENROLLMENT = "update_enrollment"
STEP_UPDATE_ORDER = "update_order"
STEP_NOTIFY = "notify"


@dataclass(frozen=True)
class SettlementResult:
    refund_id: str
    amount: Decimal
    report: ReconciliationReport


@dataclass(frozen=True)
class _SettlementContext:
    """
    Valores planos capturados antes de los pasos best-effort.

    Un rollback expira las instancias ORM de la sesión; los pasos
    posteriores leen de aquí y nunca de los modelos.
    """
    user_id: str
    enrollment_id: str
    order_id: str
    order_number: str
    customer_email: str
    customer_name: Optional[str]
    product_id: str
    product_type: ProductType
    product_title: str
    enroll_id: Optional[str]
    unenroll_product_type: str
    reason: str
    breakdown: RefundBreakdown
    at: datetime


StepFn = Callable[[AsyncSession, _SettlementContext], Awaitable[Optional[str]]]


class RefundSettlementExecutor:
    """Emite el reembolso y propaga sus efectos secundarios."""

    def __init__(
        self,
        *,
        policy: RefundPolicy,
        processor: IPaymentProcessor,
        progress: IProgressLookup,
        email_sender: IEmailSender,
        enrollment_repo: EnrollmentRepository,
        order_repo: OrderRepository,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.policy = policy
        self.processor = processor
        self.progress = progress
        self.email_sender = email_sender
        self.enrollment_repo = enrollment_repo
        self.order_repo = order_repo
        self._clock = clock

    # ------------------------------------------------------------------
    # API pública
    # ------------------------------------------------------------------
    async def process_refund(
        self,
        session: AsyncSession,
        *,
        user_id: str,
        enrollment_id: str,
        refund_reason: Optional[str] = None,
    ) -> SettlementResult:
        """
        Raises:
            EnrollmentNotFoundError / OrderNotFoundError /
            PurchasedItemNotFoundError: datos faltantes (404).
            EnrollmentAlreadyRefundedError: la inscripción ya está reembolsada (409).
            PaymentProviderError: el procesador rechazó o falló (500).
        """
        enrollment = await self.enrollment_repo.get_for_user(session, enrollment_id, user_id)
        if enrollment is None:
            raise EnrollmentNotFoundError(enrollment_id)

        if enrollment.status == EnrollmentStatus.REFUNDED:
            refund_settlements_total.labels("already_refunded").inc()
            logger.warning("Refund replay rejected: enrollment=%s already refunded", enrollment_id)
            raise EnrollmentAlreadyRefundedError(enrollment_id)

        order = await self.order_repo.get(session, enrollment.order_id)
        if order is None:
            raise OrderNotFoundError(enrollment.order_id)

        purchased_item = order.find_purchased_item(enrollment.product_id)
        if purchased_item is None:
            raise PurchasedItemNotFoundError(order.id, enrollment.product_id)

        product_type = ProductType(enrollment.product_type)
        ctx = _SettlementContext(
            user_id=user_id,
            enrollment_id=enrollment.id,
            order_id=order.id,
            order_number=order.order_number,
            customer_email=order.customer_email,
            customer_name=order.customer_name,
            product_id=enrollment.product_id,
            product_type=product_type,
            product_title=enrollment.product_title,
            enroll_id=enrollment.enroll_id,
            unenroll_product_type=str(purchased_item.get("lw_product_type") or product_type.value),
            reason=(refund_reason or "").strip() or self.policy.default_refund_reason,
            breakdown=compute_refund_breakdown(purchased_item.get("price"), self.policy),
            at=self._clock(),
        )

        refund = await self._issue_refund(ctx, order.stripe_payment_intent_id)

        report = ReconciliationReport(enrollment_id=ctx.enrollment_id, refund_id=refund.refund_id)
        steps: List[Tuple[str, StepFn]] = [
            (STEP_REVOKE_ACCESS, self._revoke_access),
            (STEP_UPDATE_ENROLLMENT, self._update_enrollment),
            (STEP_UPDATE_ORDER, self._update_order),
            (STEP_NOTIFY, self._notify),
        ]
        for name, step in steps:
            await self._run_best_effort(name, step, session, ctx, report)

        if report.needs_attention:
            logger.error(
                "Refund %s for enrollment=%s needs manual reconciliation: %s",
                refund.refund_id,
                ctx.enrollment_id,
                report.summary(),
            )
        else:
            logger.info(
                "Refund settled: refund_id=%s enrollment=%s amount=%s",
                refund.refund_id,
                ctx.enrollment_id,
                ctx.breakdown.amount,
            )

        return SettlementResult(refund_id=refund.refund_id, amount=ctx.breakdown.amount, report=report)

    # ------------------------------------------------------------------
    # Paso crítico
    # ------------------------------------------------------------------
    async def _issue_refund(self, ctx: _SettlementContext, payment_intent_id: Optional[str]) -> ProcessorRefund:
        breakdown = ctx.breakdown
        metadata = {
            "enrollment_id": ctx.enrollment_id,
            "product_id": ctx.product_id,
            "product_title": ctx.product_title,
            "user_id": ctx.user_id,
            "original_amount": str(breakdown.original_amount),
            "refund_amount": str(breakdown.amount),
            "processing_fee_applied": "true" if breakdown.fee_applied else "false",
            "processing_fee_percent": str(breakdown.fee_percent),
            "processing_fee_amount": str(breakdown.fee_amount),
        }

        try:
            refund = await self.processor.create_refund(
                payment_intent_id=payment_intent_id or "",
                amount_cents=breakdown.refund_cents,
                metadata=metadata,
                idempotency_key=refund_idempotency_key(ctx.enrollment_id),
            )
        except PaymentProviderError:
            refund_settlements_total.labels("processor_failed").inc()
            raise

        refund_settlements_total.labels("succeeded").inc()
        return refund

    # ------------------------------------------------------------------
    # Pasos best-effort
    # ------------------------------------------------------------------
    async def _run_best_effort(
        self,
        name: str,
        step: StepFn,
        session: AsyncSession,
        ctx: _SettlementContext,
        report: ReconciliationReport,
    ) -> None:
        try:
            warning = await step(session, ctx)
        except Exception as e:
            refund_reconciliation_failures_total.labels(name).inc()
            logger.error(
                "Refund step '%s' failed for enrollment=%s: %s",
                name,
                ctx.enrollment_id,
                e,
                exc_info=True,
            )
            report.record(name, StepStatus.FAILED, str(e) or type(e).__name__)
            return

        if warning:
            logger.warning("Refund step '%s' for enrollment=%s: %s", name, ctx.enrollment_id, warning)
            report.record(name, StepStatus.WARNING, warning)
        else:
            report.record(name, StepStatus.OK)

    async def _revoke_access(self, session: AsyncSession, ctx: _SettlementContext) -> Optional[str]:
        if not ctx.enroll_id:
            return "enrollment has no learning platform id; access not revoked"

        result = await self.progress.unenroll(ctx.customer_email, ctx.enroll_id, ctx.unenroll_product_type)
        if not result.success:
            raise RuntimeError(f"LearnWorlds unenrollment failed: {result.error}")
        return None

    async def _update_enrollment(self, session: AsyncSession, ctx: _SettlementContext) -> Optional[str]:
        try:
            affected = await self.enrollment_repo.mark_refunded(
                session,
                ctx.enrollment_id,
                approved_by=ctx.user_id,
                reason=ctx.reason,
                at=ctx.at,
            )
            await session.commit()
        except Exception:
            await session.rollback()
            raise

        if affected == 0:
            return "no active enrollment row updated"
        return None

    async def _update_order(self, session: AsyncSession, ctx: _SettlementContext) -> Optional[str]:
        refund_item = {
            "product_id": ctx.product_id,
            "product_type": ctx.product_type.value,
            "product_title": ctx.product_title,
            "refund_amount": float(ctx.breakdown.amount),
            "refunded_at": to_iso8601(ctx.at),
            "enrollment_id": ctx.enrollment_id,
        }
        try:
            status = await self.order_repo.record_refund(
                session,
                ctx.order_id,
                refund_item=refund_item,
                reason=ctx.reason,
                processed_by=ctx.user_id,
                at=ctx.at,
            )
            await session.commit()
        except Exception:
            await session.rollback()
            raise

        if status is None:
            return "order no longer exists"
        return None

    async def _notify(self, session: AsyncSession, ctx: _SettlementContext) -> Optional[str]:
        await self.email_sender.send_refund_email(
            ctx.customer_email,
            customer_name=ctx.customer_name,
            product_title=ctx.product_title,
            refund_amount=float(ctx.breakdown.amount),
            order_number=ctx.order_number,
            status=RefundEmailStatus.PROCESSING.value,
        )
        return None


__all__ = [
    "STEP_REVOKE_ACCESS",
    "STEP_UPDATE_ENROLLMENT",
    "STEP_UPDATE_ORDER",
    "STEP_NOTIFY",
    "SettlementResult",
    "RefundSettlementExecutor",
]

# Fin del archivo backend/app/modules/refunds/facades/settlement.py
