# -*- coding: utf-8 -*-
"""
backend/app/modules/refunds/models/__init__.py

Modelos ORM del módulo Refunds.
"""

from .order_models import Order
from .enrollment_models import Enrollment
from .bundle_models import Bundle

__all__ = ["Order", "Enrollment", "Bundle"]
