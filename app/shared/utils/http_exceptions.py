# -*- coding: utf-8 -*-
"""
backend/app/shared/utils/http_exceptions.py

Excepciones HTTP personalizadas para la API.
Estandariza respuestas de error con códigos HTTP apropiados.

Autor: Ixchel Beristain
Fecha: 2026-10-06
"""

from fastapi import HTTPException, status
from typing import Any, Dict, Optional


class BadRequestException(HTTPException):
    """400 - Solicitud mal formada o parámetros inválidos"""
    def __init__(
        self,
        detail: str = "Solicitud inválida",
        headers: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            headers=headers
        )


class UnauthorizedException(HTTPException):
    """401 - Autenticación requerida o credenciales inválidas"""
    def __init__(
        self,
        detail: str = "Unauthorized",
        headers: Optional[Dict[str, Any]] = None
    ):
        if headers is None:
            headers = {"WWW-Authenticate": "Bearer"}
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers=headers
        )


class NotFoundException(HTTPException):
    """404 - Recurso no encontrado"""
    def __init__(
        self,
        detail: str = "Recurso no encontrado",
        headers: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            headers=headers
        )


class ConflictException(HTTPException):
    """409 - Conflicto con el estado actual del recurso"""
    def __init__(
        self,
        detail: str = "Conflict",
        headers: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
            headers=headers
        )


class InternalServerException(HTTPException):
    """500 - Error interno del servidor"""
    def __init__(
        self,
        detail: Any = "Internal server error",
        headers: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
            headers=headers
        )


__all__ = [
    "BadRequestException",
    "UnauthorizedException",
    "NotFoundException",
    "ConflictException",
    "InternalServerException",
]
