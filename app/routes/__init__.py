# -*- coding: utf-8 -*-
"""
backend/app/routes/__init__.py

Ensamblador principal de ruteadores de la API pública de CourseStore.

Responsabilidades:
- Incluir el router de health (/health).
- Incluir los routers de módulos (/refunds/*).

Autor: Ixchel Beristain
Fecha: 2026-10-10
"""

from fastapi import APIRouter

from app.modules.refunds.routes import router as refunds_router
from .health_routes import router as health_router

router = APIRouter()

router.include_router(health_router)
router.include_router(refunds_router)

__all__ = ["router"]

# Fin del archivo backend/app/routes/__init__.py
