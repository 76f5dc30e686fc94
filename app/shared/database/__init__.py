# -*- coding: utf-8 -*-
"""
backend/app/shared/database/__init__.py

Re-exporta utilidades comunes de base de datos.

Autor: Ixchel Beristain
Fecha: 2026-10-05
"""

from __future__ import annotations

from .base import Base, NAMING_CONVENTION, JSONType, as_db_enum
from .repository import BaseRepository

__all__ = [
    "Base",
    "NAMING_CONVENTION",
    "JSONType",
    "as_db_enum",
    "BaseRepository",
]

# Fin del archivo backend/app/shared/database/__init__.py
