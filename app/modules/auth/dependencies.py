# -*- coding: utf-8 -*-
"""
backend/app/modules/auth/dependencies.py

Dependencias de autenticación JWT para FastAPI.

Provee:
- validate_jwt_token: Core logic para validar token (única fuente de verdad)
- get_current_user_id: Dependencia FastAPI con oauth2_scheme

Autor: Ixchel Beristain
Fecha: 2026-10-06
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends

from app.shared.utils.http_exceptions import UnauthorizedException
from .security import oauth2_scheme, decode_access_token, TokenDecodeError

logger = logging.getLogger(__name__)


def validate_jwt_token(token: str) -> str:
    """
    Valida un JWT y extrae el user_id.

    Raises:
        UnauthorizedException (401): Si el token es inválido o expirado.

    Returns:
        str: El user_id extraído del token JWT (claim 'sub').
    """
    try:
        payload = decode_access_token(token)
    except TokenDecodeError as e:
        logger.info("JWT rechazado: %s", e)
        raise UnauthorizedException() from e

    return str(payload["sub"])


async def get_current_user_id(
    token: Optional[str] = Depends(oauth2_scheme),
) -> str:
    """
    Dependencia de autenticación para endpoints protegidos.

    Extrae y valida el JWT del header Authorization: Bearer <token>.

    Returns:
        str: El user_id extraído del token JWT.
    """
    if not token:
        raise UnauthorizedException()
    return validate_jwt_token(token)


__all__ = [
    "get_current_user_id",
    "validate_jwt_token",
]
