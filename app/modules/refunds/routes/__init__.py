# -*- coding: utf-8 -*-
"""
backend/app/modules/refunds/routes/__init__.py

Router del módulo Refunds.
"""

from .refunds import router

__all__ = ["router"]
