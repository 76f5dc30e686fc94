# -*- coding: utf-8 -*-
"""
backend/app/modules/refunds/routes/refunds.py

Rutas de autoservicio de reembolsos.

Endpoints:
- POST /refunds/check-eligibility
- POST /refunds/process

Ambos requieren Authorization: Bearer <jwt>. Los errores se responden
como {"error": "..."} (ver app.shared.middleware.exception_handler).

Autor: Ixchel Beristain
Fecha: 2026-10-09
"""

from __future__ import annotations

import logging

import httpx
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.auth import get_current_user_id
from app.modules.refunds.adapters import LearnWorldsClient, StripeRefundAdapter
from app.modules.refunds.errors import (
    EnrollmentAlreadyRefundedError,
    NotFoundError,
    PaymentProviderError,
)
from app.modules.refunds.facades import (
    EligibilityVerdict,
    RefundEligibilityEvaluator,
    RefundSettlementExecutor,
)
from app.modules.refunds.policy import RefundPolicy
from app.modules.refunds.repositories import (
    BundleRepository,
    EnrollmentRepository,
    OrderRepository,
)
from app.modules.refunds.schemas import (
    EligibilityCheckRequest,
    EligibilityCheckResponse,
    EligibilityDetailsOut,
    RefundProcessRequest,
    RefundProcessResponse,
)
from app.modules.refunds.utils.datetime_helpers import to_iso8601
from app.shared.config import get_settings
from app.shared.core.http_client_cache import get_http_client
from app.shared.database.database import get_async_session
from app.shared.integrations.email_sender import IEmailSender, get_email_sender
from app.shared.utils.http_exceptions import (
    BadRequestException,
    ConflictException,
    InternalServerException,
    NotFoundException,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/refunds",
    tags=["refunds"],
)


# ---------------------------------------------------------------------------
# Dependencias (sobrescribibles en tests vía app.dependency_overrides)
# ---------------------------------------------------------------------------

def get_refund_policy() -> RefundPolicy:
    return RefundPolicy.from_settings(get_settings())


async def get_progress_lookup(
    http_client: httpx.AsyncClient = Depends(get_http_client),
) -> LearnWorldsClient:
    return LearnWorldsClient.from_settings(get_settings(), http_client)


def get_payment_processor() -> StripeRefundAdapter:
    return StripeRefundAdapter.from_settings(get_settings())


def get_eligibility_evaluator(
    policy: RefundPolicy = Depends(get_refund_policy),
    progress: LearnWorldsClient = Depends(get_progress_lookup),
) -> RefundEligibilityEvaluator:
    return RefundEligibilityEvaluator(
        policy=policy,
        progress=progress,
        enrollment_repo=EnrollmentRepository(),
        order_repo=OrderRepository(),
        bundle_repo=BundleRepository(),
    )


def get_settlement_executor(
    policy: RefundPolicy = Depends(get_refund_policy),
    progress: LearnWorldsClient = Depends(get_progress_lookup),
    processor: StripeRefundAdapter = Depends(get_payment_processor),
    email_sender: IEmailSender = Depends(get_email_sender),
) -> RefundSettlementExecutor:
    return RefundSettlementExecutor(
        policy=policy,
        processor=processor,
        progress=progress,
        email_sender=email_sender,
        enrollment_repo=EnrollmentRepository(),
        order_repo=OrderRepository(),
    )


def _to_response(verdict: EligibilityVerdict) -> EligibilityCheckResponse:
    if verdict.details is None:
        return EligibilityCheckResponse(eligible=verdict.eligible, reason=verdict.reason)

    d = verdict.details
    b = d.breakdown
    return EligibilityCheckResponse(
        eligible=verdict.eligible,
        reason=verdict.reason,
        details=EligibilityDetailsOut(
            enrollment_id=d.enrollment_id,
            product_title=d.product_title,
            purchase_date=to_iso8601(d.purchase_date),
            days_elapsed=d.days_elapsed,
            progress_percent=d.progress_percent,
            refund_amount=float(d.refund_amount),
            original_amount=float(b.original_amount),
            processing_fee_applied=b.fee_applied,
            processing_fee_percent=b.fee_percent,
            processing_fee_amount=float(b.fee_amount),
            estimated_refund_amount=float(b.amount),
        ),
    )


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post(
    "/check-eligibility",
    response_model=EligibilityCheckResponse,
    response_model_by_alias=True,
    response_model_exclude_none=True,
    summary="Verifica si una inscripción es elegible para reembolso",
)
async def check_eligibility(
    payload: EligibilityCheckRequest,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_async_session),
    evaluator: RefundEligibilityEvaluator = Depends(get_eligibility_evaluator),
):
    if not payload.enrollment_id:
        raise BadRequestException("Enrollment ID required")

    try:
        verdict = await evaluator.check_eligibility(
            session,
            user_id=user_id,
            enrollment_id=payload.enrollment_id,
        )
    except NotFoundError as e:
        raise NotFoundException(e.message) from e
    except Exception as e:
        logger.error("Error checking refund eligibility: %s", e, exc_info=True)
        raise InternalServerException() from e

    return _to_response(verdict)


@router.post(
    "/process",
    response_model=RefundProcessResponse,
    response_model_by_alias=True,
    summary="Emite el reembolso y revoca el acceso",
)
async def process_refund(
    payload: RefundProcessRequest,
    user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_async_session),
    executor: RefundSettlementExecutor = Depends(get_settlement_executor),
):
    if not payload.enrollment_id:
        raise BadRequestException("Enrollment ID required")

    try:
        result = await executor.process_refund(
            session,
            user_id=user_id,
            enrollment_id=payload.enrollment_id,
            refund_reason=payload.refund_reason,
        )
    except NotFoundError as e:
        raise NotFoundException(e.message) from e
    except EnrollmentAlreadyRefundedError as e:
        raise ConflictException(e.message) from e
    except PaymentProviderError as e:
        raise InternalServerException({"error": e.message, "details": e.details}) from e
    except Exception as e:
        logger.error("Error processing refund: %s", e, exc_info=True)
        raise InternalServerException() from e

    return RefundProcessResponse(refund_id=result.refund_id, amount=float(result.amount))


__all__ = [
    "router",
    "get_refund_policy",
    "get_progress_lookup",
    "get_payment_processor",
    "get_eligibility_evaluator",
    "get_settlement_executor",
]

# Fin del archivo backend/app/modules/refunds/routes/refunds.py
