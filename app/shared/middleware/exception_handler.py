# -*- coding: utf-8 -*-
"""
backend/app/shared/middleware/exception_handler.py

Handlers de excepciones que garantizan respuestas JSON con forma estable:
    {"error": "<mensaje>"[, "details": "<detalle>"]}

- HTTPException: detail str → {"error": detail}; detail dict se respeta tal cual.
- Excepciones no manejadas: se registran y se responde 500 genérico.

Autor: Ixchel Beristain
Fecha: 2026-10-06
"""

from __future__ import annotations

import logging
import uuid

from fastapi import FastAPI, HTTPException, Request
from starlette.responses import Response

from app.shared.utils.json_response import json_response_utf8

logger = logging.getLogger(__name__)

# Header para request ID (nginx, proxies, etc.)
REQUEST_ID_HEADERS = ["x-request-id", "x-correlation-id"]


def get_request_id(request: Request) -> str:
    """Extrae request_id de headers o genera uno nuevo."""
    for header in REQUEST_ID_HEADERS:
        value = request.headers.get(header)
        if value:
            return value
    return uuid.uuid4().hex[:16]


async def http_exception_handler(request: Request, exc: HTTPException) -> Response:
    content = exc.detail if isinstance(exc.detail, dict) else {"error": exc.detail}
    return json_response_utf8(content, status_code=exc.status_code, headers=exc.headers)


async def unhandled_exception_handler(request: Request, exc: Exception) -> Response:
    request_id = get_request_id(request)
    logger.error(
        "unhandled_exception request_id=%s method=%s path=%s error=%r",
        request_id,
        request.method,
        request.url.path,
        exc,
        exc_info=exc,
    )
    return json_response_utf8(
        {"error": "Internal server error"},
        status_code=500,
        headers={"X-Request-ID": request_id},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Registra los handlers JSON en la aplicación (main y apps de prueba)."""
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = [
    "get_request_id",
    "http_exception_handler",
    "unhandled_exception_handler",
    "register_exception_handlers",
]
