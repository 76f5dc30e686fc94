# -*- coding: utf-8 -*-
"""
backend/app/modules/refunds/models/bundle_models.py

Modelo Bundle (solo lectura para reembolsos).
lw_bundle_children mapea id de curso incluido → enroll id del curso en la
plataforma de aprendizaje.

Autor: Ixchel Beristain
Fecha: 2026-10-07
"""

from __future__ import annotations

from typing import Dict, Optional

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from app.shared.database.base import Base, JSONType


class Bundle(Base):
    __tablename__ = "bundles"

    bundle_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    title: Mapped[Optional[str]] = mapped_column(String(255))
    lw_bundle_children: Mapped[Optional[Dict[str, str]]] = mapped_column(JSONType, nullable=True)


__all__ = ["Bundle"]

# Fin del archivo backend/app/modules/refunds/models/bundle_models.py
