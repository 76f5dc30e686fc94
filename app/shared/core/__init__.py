# -*- coding: utf-8 -*-
"""
backend/app/shared/core/__init__.py

Recursos globales compartidos del proceso (cliente HTTP de salida).

Autor: Ixchel Beristain
Fecha: 2026-10-06
"""

from .http_client_cache import (
    create_http_client,
    get_http_client,
    close_http_client,
)

__all__ = [
    "create_http_client",
    "get_http_client",
    "close_http_client",
]
