# -*- coding: utf-8 -*-
"""
backend/app/modules/auth/security.py

Módulo de seguridad para Auth:
- Esquema OAuth2 (Bearer)
- Creación / decodificación de JWT emitidos por el proveedor de identidad
- Config vía settings (JWT_SECRET_KEY, JWT_ALGORITHM)
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Union

from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt  # pip install "python-jose[cryptography]"

from app.shared.config import get_settings

# Minutos de vigencia por defecto para tokens emitidos localmente (tests/scripts)
ACCESS_TOKEN_EXPIRE_MINUTES = 60

# -----------------------------------------------------------------------------
# Esquema OAuth2 para extraer el token de Authorization: Bearer <token>
# auto_error=False: la ausencia de token se traduce a 401 en dependencies.py
# -----------------------------------------------------------------------------
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/token", auto_error=False)


def _jwt_config() -> tuple[str, str]:
    settings = get_settings()
    return settings.jwt_secret_key.get_secret_value(), settings.jwt_algorithm


# -----------------------------------------------------------------------------
# Manejo de JWT
# -----------------------------------------------------------------------------
class TokenDecodeError(Exception):
    """Error al decodificar/validar un token JWT."""


def create_access_token(
    subject: Union[str, int],
    expires_delta: Optional[timedelta] = None,
    **extra: Any,
) -> str:
    """
    Crea un JWT con claim 'sub' y metadatos opcionales en `extra`.
    """
    secret_key, algorithm = _jwt_config()
    now = datetime.now(tz=timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode: Dict[str, Any] = {"sub": str(subject), "iat": int(now.timestamp()), "exp": int(expire.timestamp())}
    if extra:
        to_encode.update(extra)
    return jwt.encode(to_encode, secret_key, algorithm=algorithm)


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Decodifica y valida un JWT. Lanza TokenDecodeError si es inválido/expirado.
    """
    secret_key, algorithm = _jwt_config()
    try:
        payload = jwt.decode(token, secret_key, algorithms=[algorithm])
    except JWTError as e:
        raise TokenDecodeError("Token inválido o expirado") from e

    # Validación mínima del 'sub'
    sub = payload.get("sub")
    if sub is None or not str(sub).strip():
        raise TokenDecodeError("Token sin 'sub'")
    return payload
# Fin del archivo
