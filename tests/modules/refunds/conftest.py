# backend/tests/modules/refunds/conftest.py
# -*- coding: utf-8 -*-
"""
Dobles de prueba para el módulo Refunds.

- FakeProgressLookup: respuestas programables de la plataforma de aprendizaje.
- FakePaymentProcessor: registra las llamadas y puede fallar a demanda.
- RecordingEmailSender: acumula los correos "enviados".
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Sequence

import pytest

from app.modules.refunds.adapters import (
    ProcessorRefund,
    ProgressResult,
    SectionLimitResult,
    SectionProgress,
    UnenrollResult,
)
from app.modules.refunds.errors import PaymentProviderError
from app.modules.refunds.facades import RefundEligibilityEvaluator, RefundSettlementExecutor
from app.modules.refunds.policy import RefundPolicy
from app.modules.refunds.repositories import (
    BundleRepository,
    EnrollmentRepository,
    OrderRepository,
)


class FakeProgressLookup:
    def __init__(self) -> None:
        self.progress = ProgressResult(success=True, progress=12.5)
        self.section_results: Dict[str, SectionLimitResult] = {}
        self.bulk_map: Dict[str, List[SectionProgress]] = {}
        self.unenroll_result = UnenrollResult(success=True)
        self.section_calls: List[Dict[str, Any]] = []
        self.bulk_calls: List[List[str]] = []
        self.unenroll_calls: List[tuple] = []

    async def get_course_progress(self, email: str, course_enroll_id: str) -> ProgressResult:
        return self.progress

    async def fetch_user_course_section_progress_map(
        self, email: str, course_ids: Iterable[str]
    ) -> Dict[str, List[SectionProgress]]:
        self.bulk_calls.append(list(course_ids))
        return self.bulk_map

    async def check_course_section_limit(
        self,
        email: str,
        course_enroll_id: str,
        *,
        section_limit: int,
        unit_progress_rate_limit: float,
        sections_override: Optional[Sequence[SectionProgress]] = None,
    ) -> SectionLimitResult:
        self.section_calls.append(
            {
                "enroll_id": course_enroll_id,
                "section_limit": section_limit,
                "sections_override": sections_override,
            }
        )
        return self.section_results.get(course_enroll_id, SectionLimitResult(success=True))

    async def unenroll(self, email: str, enroll_id: str, product_type_hint: str) -> UnenrollResult:
        self.unenroll_calls.append((email, enroll_id, product_type_hint))
        return self.unenroll_result


class FakePaymentProcessor:
    def __init__(self) -> None:
        self.calls: List[Dict[str, Any]] = []
        self.error: Optional[str] = None

    async def create_refund(
        self,
        *,
        payment_intent_id: str,
        amount_cents: int,
        metadata: Dict[str, str],
        idempotency_key: str,
    ) -> ProcessorRefund:
        self.calls.append(
            {
                "payment_intent_id": payment_intent_id,
                "amount_cents": amount_cents,
                "metadata": metadata,
                "idempotency_key": idempotency_key,
            }
        )
        if self.error:
            raise PaymentProviderError(self.error)
        return ProcessorRefund(refund_id=f"re_{len(self.calls)}", amount_cents=amount_cents, status="succeeded")


class RecordingEmailSender:
    def __init__(self) -> None:
        self.sent: List[Dict[str, Any]] = []
        self.fail = False

    async def send_refund_email(self, to_email: str, **kwargs: Any) -> None:
        if self.fail:
            raise RuntimeError("MailerSend API error: 500")
        self.sent.append({"to_email": to_email, **kwargs})


@pytest.fixture
def policy() -> RefundPolicy:
    return RefundPolicy()


@pytest.fixture
def progress() -> FakeProgressLookup:
    return FakeProgressLookup()


@pytest.fixture
def processor() -> FakePaymentProcessor:
    return FakePaymentProcessor()


@pytest.fixture
def email_sender() -> RecordingEmailSender:
    return RecordingEmailSender()


@pytest.fixture
def make_evaluator(progress, now):
    def _make(policy: Optional[RefundPolicy] = None, **overrides: Any) -> RefundEligibilityEvaluator:
        deps: Dict[str, Any] = dict(
            policy=policy or RefundPolicy(),
            progress=progress,
            enrollment_repo=EnrollmentRepository(),
            order_repo=OrderRepository(),
            bundle_repo=BundleRepository(),
            clock=lambda: now,
        )
        deps.update(overrides)
        return RefundEligibilityEvaluator(**deps)

    return _make


@pytest.fixture
def make_executor(progress, processor, email_sender, now):
    def _make(policy: Optional[RefundPolicy] = None, **overrides: Any) -> RefundSettlementExecutor:
        deps: Dict[str, Any] = dict(
            policy=policy or RefundPolicy(),
            processor=processor,
            progress=progress,
            email_sender=email_sender,
            enrollment_repo=EnrollmentRepository(),
            order_repo=OrderRepository(),
            clock=lambda: now,
        )
        deps.update(overrides)
        return RefundSettlementExecutor(**deps)

    return _make
