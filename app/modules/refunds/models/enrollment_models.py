# -*- coding: utf-8 -*-
"""
backend/app/modules/refunds/models/enrollment_models.py

Modelo Enrollment: acceso de un usuario a un producto comprado
(curso o bundle). Se crea al completar la compra y solo el flujo de
reembolso lo transiciona a "refunded" (nunca se elimina).

Autor: Ixchel Beristain
Fecha: 2026-10-07
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Index, String, func
from sqlalchemy.orm import Mapped, mapped_column

from app.shared.database.base import Base
from app.modules.refunds.enums import EnrollmentOutcome, EnrollmentStatus, ProductType


class Enrollment(Base):
    __tablename__ = "enrollments"
    __table_args__ = (
        Index("ix_enrollments_user_status", "user_id", "status"),
        Index("ix_enrollments_order_id", "order_id"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    # Identificador opaco del proveedor de identidad
    user_id: Mapped[str] = mapped_column(String(128), nullable=False)

    product_id: Mapped[str] = mapped_column(String(128), nullable=False)
    product_type: Mapped[ProductType] = mapped_column(ProductType.as_db_enum(), nullable=False)
    product_title: Mapped[str] = mapped_column(String(255), nullable=False)

    # Identificador de acceso en la plataforma de aprendizaje
    enroll_id: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)

    status: Mapped[EnrollmentStatus] = mapped_column(
        EnrollmentStatus.as_db_enum(),
        nullable=False,
        default=EnrollmentStatus.ACTIVE,
    )
    enrollment_status: Mapped[EnrollmentOutcome] = mapped_column(
        EnrollmentOutcome.as_db_enum(),
        nullable=False,
        default=EnrollmentOutcome.SUCCESS,
    )

    order_id: Mapped[str] = mapped_column(
        ForeignKey("orders.id", ondelete="RESTRICT"),
        nullable=False,
    )

    # Auditoría de reembolso
    refund_requested_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
    refund_approved_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))
    refund_approved_by: Mapped[Optional[str]] = mapped_column(String(128))
    refund_reason: Mapped[Optional[str]] = mapped_column(String(1000))

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        onupdate=func.now(),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<Enrollment id={self.id} product={self.product_id} status={self.status}>"


__all__ = ["Enrollment"]

# Fin del archivo backend/app/modules/refunds/models/enrollment_models.py
