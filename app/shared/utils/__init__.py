# -*- coding: utf-8 -*-
"""
backend/app/shared/utils/__init__.py

Utilidades HTTP comunes: excepciones con cuerpo {"error": ...} y
respuesta JSON en UTF-8.

Autor: Ixchel Beristain
Fecha: 2026-10-06
"""

from .http_exceptions import (
    BadRequestException,
    UnauthorizedException,
    NotFoundException,
    ConflictException,
    InternalServerException,
)
from .json_response import UTF8JSONResponse, json_response_utf8

__all__ = [
    # HTTP Exceptions
    "BadRequestException",
    "UnauthorizedException",
    "NotFoundException",
    "ConflictException",
    "InternalServerException",

    # Respuestas
    "UTF8JSONResponse",
    "json_response_utf8",
]

# Fin del archivo backend/app/shared/utils/__init__.py
