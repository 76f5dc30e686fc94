# -*- coding: utf-8 -*-
"""
backend/app/shared/database/base.py

Base declarativa y convención de nombres para modelos ORM.

Este módulo proporciona:
- Base: clase base declarativa de SQLAlchemy
- NAMING_CONVENTION: convención de nombres para constraints
- as_db_enum: helper para mapear enums Python a ENUM de base de datos
- JSONType: JSON genérico que usa JSONB en PostgreSQL

Autor: Ixchel Beristain
Fecha: 2026-10-05
"""

from __future__ import annotations

from enum import Enum
from typing import Type

from sqlalchemy import JSON, MetaData
from sqlalchemy import Enum as SAEnum
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase

# ===== NAMING CONVENTION =====
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

# JSONB en PostgreSQL, JSON genérico en otros dialectos (sqlite en pruebas)
JSONType = JSON().with_variant(JSONB(), "postgresql")


# ===== BASE DECLARATIVA =====
class Base(DeclarativeBase):
    """
    Base declarativa para todos los modelos ORM.
    Incluye convención de nombres para constraints.
    """
    metadata = MetaData(naming_convention=NAMING_CONVENTION)


# ===== HELPER GENÉRICO PARA ENUMS =====
def as_db_enum(enum_cls: Type[Enum], name: str | None = None) -> SAEnum:
    """
    Devuelve un tipo Enum de SQLAlchemy que persiste los *valores* del enum
    (no los nombres de los miembros).

    Uso típico:

        class Enrollment(Base):
            status: Mapped[EnrollmentStatus] = mapped_column(
                as_db_enum(EnrollmentStatus, name="enrollment_status_enum"),
                nullable=False,
            )

    - Si no se pasa `name`, usa el nombre de la clase en minúsculas.
    - En PostgreSQL se traduce a un ENUM nativo; en sqlite a VARCHAR + CHECK.
    """
    enum_name = name or enum_cls.__name__.lower()

    def _values(_: object) -> list[str]:
        return [e.value for e in enum_cls]  # type: ignore[arg-type]

    return SAEnum(
        enum_cls,
        name=enum_name,
        values_callable=_values,
        validate_strings=True,
    )


__all__ = ["Base", "NAMING_CONVENTION", "JSONType", "as_db_enum"]

# Fin del archivo backend/app/shared/database/base.py
