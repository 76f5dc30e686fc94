# -*- coding: utf-8 -*-
"""
backend/app/modules/refunds/repositories/__init__.py

Repositorios del módulo Refunds.
"""

from .enrollment_repository import EnrollmentRepository
from .order_repository import OrderRepository
from .bundle_repository import BundleRepository

__all__ = [
    "EnrollmentRepository",
    "OrderRepository",
    "BundleRepository",
]
