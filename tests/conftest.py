# backend/tests/conftest.py
# -*- coding: utf-8 -*-
"""
Config global de tests para CourseStore.

- Fija PYTHON_ENV=test ANTES de importar la app (EnvTestingSettings:
  sqlite en memoria, Stripe/LearnWorlds dummy, email en consola).
- Base de datos aiosqlite en memoria con StaticPool: todas las conexiones
  comparten la misma BD dentro de un test.
- Helpers para sembrar órdenes, enrollments y bundles.
"""

import os
import sys
import pathlib
import uuid
from collections.abc import AsyncIterator
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Any, Dict, List, Optional

# -----------------------------------------------------------------------------
# 0) Entorno de pruebas (debe ir antes de cualquier import de app.*)
# -----------------------------------------------------------------------------
os.environ["PYTHON_ENV"] = "test"
os.environ.setdefault("DB_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("EMAIL_MODE", "console")

BACKEND_ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))
assert (BACKEND_ROOT / "app").exists(), f"'app' no existe en {BACKEND_ROOT}"

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.shared.database.base import Base
from app.modules.refunds.enums import (
    EnrollmentOutcome,
    EnrollmentStatus,
    OrderPaymentStatus,
    ProductType,
)
from app.modules.refunds.models import Bundle, Enrollment, Order

# Instante fijo para pruebas de ventanas de días
NOW = datetime(2026, 3, 15, 12, 0, 0, tzinfo=timezone.utc)
TEST_USER_ID = "user_2abcTestUser"


# -----------------------------------------------------------------------------
# 1) Base de datos en memoria
# -----------------------------------------------------------------------------
@pytest.fixture
async def db_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
async def db_session(db_engine) -> AsyncIterator[AsyncSession]:
    factory = async_sessionmaker(bind=db_engine, expire_on_commit=False, class_=AsyncSession)
    async with factory() as session:
        yield session


# -----------------------------------------------------------------------------
# 2) Siembra de datos
# -----------------------------------------------------------------------------
def make_purchased_item(
    product_id: str,
    *,
    price: float = 100.0,
    product_type: ProductType = ProductType.COURSE,
    enroll_id: Optional[str] = None,
    title: str = "Intro to Immigration Forms",
) -> Dict[str, Any]:
    return {
        "product_id": product_id,
        "enroll_id": enroll_id or f"lw-{product_id}",
        "product_type": product_type.value,
        "lw_product_type": product_type.value,
        "title": title,
        "price": price,
        "original_price": price,
    }


@pytest.fixture
def seed(db_session):
    """
    Fábrica async que inserta una orden pagada con un enrollment por línea.

    Uso:
        order, enrollments = await seed(items=[make_purchased_item("c-1")])
    """

    async def _seed(
        *,
        items: Optional[List[Dict[str, Any]]] = None,
        paid_at: datetime = NOW - timedelta(days=1),
        user_id: str = TEST_USER_ID,
        payment_intent: Optional[str] = "pi_test_123",
        status: EnrollmentStatus = EnrollmentStatus.ACTIVE,
        outcome: EnrollmentOutcome = EnrollmentOutcome.SUCCESS,
        bundle_children: Optional[Dict[str, str]] = None,
    ):
        items = items or [make_purchased_item("course-1")]
        order = Order(
            id=str(uuid.uuid4()),
            order_number=f"ORD-{uuid.uuid4().hex[:8].upper()}",
            stripe_payment_intent_id=payment_intent,
            payment_status=OrderPaymentStatus.PAID,
            customer_email="student@example.com",
            customer_name="Ana Student",
            purchased_items=items,
            paid_at=paid_at,
            refunded_items=[],
            refund_amount=Decimal("0"),
            created_at=paid_at,
        )
        db_session.add(order)

        enrollments = []
        for item in items:
            product_type = ProductType(item["product_type"])
            enrollment = Enrollment(
                id=str(uuid.uuid4()),
                user_id=user_id,
                product_id=item["product_id"],
                product_type=product_type,
                product_title=item["title"],
                enroll_id=item.get("enroll_id"),
                status=status,
                enrollment_status=outcome,
                order_id=order.id,
                created_at=paid_at,
            )
            db_session.add(enrollment)
            enrollments.append(enrollment)

            if product_type == ProductType.BUNDLE:
                db_session.add(
                    Bundle(
                        bundle_id=item["product_id"],
                        title=item["title"],
                        lw_bundle_children=bundle_children or {},
                    )
                )

        await db_session.commit()
        return order, enrollments

    return _seed


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def user_id() -> str:
    return TEST_USER_ID


@pytest.fixture
def make_item():
    return make_purchased_item
