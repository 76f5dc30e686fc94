# -*- coding: utf-8 -*-
"""
backend/app/shared/utils/json_response.py

Respuestas JSON con charset UTF-8 explícito.

Este módulo proporciona:
1. UTF8JSONResponse: Clase para usar como default_response_class en FastAPI
2. json_response_utf8: Helper funcional para handlers de error

Autor: Ixchel Beristain
Fecha: 2026-10-06
"""

from typing import Any, Dict, Optional
from fastapi.responses import JSONResponse


class UTF8JSONResponse(JSONResponse):
    """
    JSONResponse con Content-Type: application/json; charset=utf-8.

    Usar como default_response_class en FastAPI para que todas las
    respuestas JSON incluyan charset UTF-8 automáticamente.
    """
    media_type = "application/json; charset=utf-8"


def json_response_utf8(
    content: Any,
    status_code: int = 200,
    headers: Optional[Dict[str, str]] = None,
) -> UTF8JSONResponse:
    """
    Crea un JSONResponse con Content-Type: application/json; charset=utf-8.
    """
    return UTF8JSONResponse(
        content=content,
        status_code=status_code,
        headers=headers,
    )


__all__ = ["UTF8JSONResponse", "json_response_utf8"]
