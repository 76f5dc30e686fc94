# -*- coding: utf-8 -*-
"""
backend/app/modules/refunds/enums/product_type_enum.py

Tipo de producto comprado: curso individual o bundle de cursos.
Sincronizado con el tipo ENUM de la BD: product_type_enum.

Autor: Ixchel Beristain
Fecha: 2026-10-07
"""

from enum import StrEnum

from sqlalchemy import Enum as SAEnum

from app.shared.database.base import as_db_enum


class ProductType(StrEnum):
    """Tipo de producto (curso o bundle)."""

    COURSE = "course"
    BUNDLE = "bundle"

    @property
    def plural_label(self) -> str:
        """Etiqueta en plural usada en los mensajes al cliente."""
        return f"{self.value}s"

    @classmethod
    def as_db_enum(cls, name: str = "product_type_enum") -> SAEnum:
        return as_db_enum(cls, name=name)


__all__ = ["ProductType"]

# Fin del archivo backend/app/modules/refunds/enums/product_type_enum.py
