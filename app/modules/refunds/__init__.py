# -*- coding: utf-8 -*-
"""
backend/app/modules/refunds/__init__.py

Módulo Refunds: elegibilidad y liquidación de reembolsos de cursos y bundles.

Estructura:
- adapters/: LearnWorlds (progreso, unenroll) y Stripe (emisión de reembolsos)
- facades/: evaluador de elegibilidad y ejecutor de liquidación
- repositories/: acceso a enrollments, órdenes y bundles
- routes/: endpoints /refunds/*
"""

from .policy import RefundPolicy

__all__ = ["RefundPolicy"]
