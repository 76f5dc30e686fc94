# -*- coding: utf-8 -*-
"""
Liquidaciones concurrentes sobre la misma orden.

Usa una base sqlite en archivo con NullPool: cada sesión abre su propia
conexión, como dos requests en paralelo. La segunda liquidación corre
completa mientras la primera espera la respuesta del procesador; la
primera ya tiene la orden cargada (expire_on_commit=False) y debe releerla
antes de escribir refunded_items.

Autor: Ixchel Beristain
Fecha: 2026-10-18
"""

from decimal import Decimal

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from app.modules.refunds.enums import EnrollmentStatus, OrderPaymentStatus
from app.modules.refunds.facades import StepStatus
from app.modules.refunds.facades.settlement import STEP_UPDATE_ENROLLMENT, STEP_UPDATE_ORDER
from app.modules.refunds.models import Enrollment, Order
from app.shared.database.base import Base


@pytest.fixture
async def db_engine(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'refunds.db'}",
        poolclass=NullPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(bind=db_engine, expire_on_commit=False, class_=AsyncSession)


class _InterleavedProcessor:
    """Ejecuta `concurrent` una sola vez antes de delegar la primera llamada."""

    def __init__(self, inner, concurrent):
        self.inner = inner
        self._pending = concurrent

    async def create_refund(self, **kwargs):
        pending, self._pending = self._pending, None
        if pending is not None:
            await pending()
        return await self.inner.create_refund(**kwargs)


@pytest.mark.asyncio
async def test_parallel_settlements_keep_both_refunded_items(
    db_session, session_factory, seed, make_item, make_executor, processor, user_id
):
    order, (first, second) = await seed(items=[make_item("c-1"), make_item("c-2")])

    async def settle_second():
        async with session_factory() as other:
            await make_executor().process_refund(other, user_id=user_id, enrollment_id=second.id)

    executor = make_executor(processor=_InterleavedProcessor(processor, settle_second))
    result = await executor.process_refund(db_session, user_id=user_id, enrollment_id=first.id)

    assert not result.report.needs_attention
    assert len(processor.calls) == 2

    async with session_factory() as fresh:
        stored = await fresh.get(Order, order.id)
        assert sorted(entry["enrollment_id"] for entry in stored.refunded_items) == sorted([first.id, second.id])
        assert stored.refund_amount == Decimal("200.00")
        assert stored.payment_status == OrderPaymentStatus.REFUNDED


@pytest.mark.asyncio
async def test_parallel_settlements_of_same_enrollment_converge(
    db_session, session_factory, seed, make_executor, processor, user_id
):
    order, (enrollment,) = await seed()

    async def settle_same():
        async with session_factory() as other:
            await make_executor().process_refund(other, user_id=user_id, enrollment_id=enrollment.id)

    executor = make_executor(processor=_InterleavedProcessor(processor, settle_same))
    result = await executor.process_refund(db_session, user_id=user_id, enrollment_id=enrollment.id)

    # Ambas vieron la inscripción activa: el procesador deduplica por la misma key
    keys = {call["idempotency_key"] for call in processor.calls}
    assert keys == {f"refund-enrollment-{enrollment.id}"}
    assert result.report.status_of(STEP_UPDATE_ENROLLMENT) == StepStatus.WARNING
    assert result.report.status_of(STEP_UPDATE_ORDER) == StepStatus.OK

    async with session_factory() as fresh:
        stored = await fresh.get(Order, order.id)
        assert len(stored.refunded_items) == 1
        assert stored.refund_amount == Decimal("100.00")
        stored_enrollment = await fresh.get(Enrollment, enrollment.id)
        assert stored_enrollment.status == EnrollmentStatus.REFUNDED
