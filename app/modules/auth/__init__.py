# -*- coding: utf-8 -*-
"""
backend/app/modules/auth/__init__.py

Auth package public API.

El storefront delega la autenticación a un proveedor de identidad externo;
este paquete solo valida el bearer JWT y expone el user_id opaco.

Expone:
- get_current_user_id (dependencia FastAPI)
- validate_jwt_token
"""

from .dependencies import get_current_user_id, validate_jwt_token

__all__ = [
    "get_current_user_id",
    "validate_jwt_token",
]
