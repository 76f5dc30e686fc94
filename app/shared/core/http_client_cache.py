# -*- coding: utf-8 -*-
"""
backend/app/shared/core/http_client_cache.py

Gestión del cliente HTTP global compartido (httpx.AsyncClient).
Se crea de forma perezosa y se cierra en el lifespan de la aplicación.

Autor: Ixchel Beristain
Fecha: 2026-10-06
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import httpx

logger = logging.getLogger(__name__)

# Lock async para evitar creación concurrente del cliente HTTP
_http_client_lock = asyncio.Lock()
_http_client: Optional[httpx.AsyncClient] = None


async def create_http_client() -> httpx.AsyncClient:
    """
    Crea (o recrea) el cliente HTTP global compartido.
    Protegido contra creación concurrente con asyncio.Lock.
    """
    global _http_client

    async with _http_client_lock:
        from app.shared.config import get_settings
        settings = get_settings()

        # Cerrar cliente previo si existe (re-init en tests)
        if _http_client is not None:
            await _http_client.aclose()

        headers = {
            "User-Agent": f"{settings.app_name}/{settings.app_version}",
        }
        timeout = httpx.Timeout(settings.learnworlds_timeout_sec, connect=10.0)
        limits = httpx.Limits(
            max_connections=20,
            max_keepalive_connections=10,
            keepalive_expiry=30.0,
        )

        _http_client = httpx.AsyncClient(
            headers=headers,
            timeout=timeout,
            limits=limits,
            transport=httpx.AsyncHTTPTransport(retries=2),
        )
        logger.info("Cliente HTTP global inicializado")
        return _http_client


async def get_http_client() -> httpx.AsyncClient:
    """
    Obtiene el cliente HTTP global. Si no existe, lo crea.
    """
    if _http_client is None or _http_client.is_closed:
        return await create_http_client()
    return _http_client


async def close_http_client() -> None:
    """Cierra el cliente HTTP global (shutdown del lifespan)."""
    global _http_client

    async with _http_client_lock:
        if _http_client is not None:
            await _http_client.aclose()
            _http_client = None
            logger.info("Cliente HTTP global cerrado")


__all__ = ["create_http_client", "get_http_client", "close_http_client"]

# Fin del archivo backend/app/shared/core/http_client_cache.py
