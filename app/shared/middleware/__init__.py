# -*- coding: utf-8 -*-
"""
backend/app/shared/middleware/__init__.py

Módulo de middlewares compartidos.
"""

from .exception_handler import get_request_id, register_exception_handlers

__all__ = [
    "get_request_id",
    "register_exception_handlers",
]
