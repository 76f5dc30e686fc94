# -*- coding: utf-8 -*-
"""
backend/app/modules/refunds/enums/enrollment_status_enum.py

Estados de una inscripción (enrollment):
- EnrollmentStatus: ciclo de vida del acceso (active → refunded).
- EnrollmentOutcome: resultado del aprovisionamiento en la plataforma
  de aprendizaje (success | failure), independiente del ciclo de vida.

Autor: Ixchel Beristain
Fecha: 2026-10-07
"""

from enum import StrEnum

from sqlalchemy import Enum as SAEnum

from app.shared.database.base import as_db_enum


class EnrollmentStatus(StrEnum):
    """Ciclo de vida de la inscripción."""

    ACTIVE = "active"
    REFUNDED = "refunded"
    EXPIRED = "expired"
    CANCELLED = "cancelled"

    @classmethod
    def as_db_enum(cls, name: str = "enrollment_status_enum") -> SAEnum:
        return as_db_enum(cls, name=name)


class EnrollmentOutcome(StrEnum):
    """Resultado del aprovisionamiento del acceso."""

    SUCCESS = "success"
    FAILURE = "failure"

    @classmethod
    def as_db_enum(cls, name: str = "enrollment_outcome_enum") -> SAEnum:
        return as_db_enum(cls, name=name)


__all__ = ["EnrollmentStatus", "EnrollmentOutcome"]

# Fin del archivo backend/app/modules/refunds/enums/enrollment_status_enum.py
