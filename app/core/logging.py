# -*- coding: utf-8 -*-
"""
backend/app/core/logging.py

Fachada de logging bajo `app.core`.
Delega en `app.shared.config.logging_config` y toma nivel y formato
desde la configuración activa cuando no se indican explícitamente.

Autor: Ixchel Beristain
Fecha: 2026-10-05
"""

from typing import Literal, Optional

from app.shared.config.logging_config import setup_logging as _setup_logging


def setup_logging(
    level: Optional[Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]] = None,
    fmt: Optional[Literal["plain", "pretty", "json"]] = None,
) -> None:
    """
    Configura el sistema de logging de la aplicación.

    Args:
        level: Nivel de logging; por defecto LOG_LEVEL de settings.
        fmt: Formato de salida; por defecto LOG_FORMAT de settings.
    """
    if level is None or fmt is None:
        from app.core.settings import get_settings

        settings = get_settings()
        level = level or settings.log_level
        fmt = fmt or settings.log_format
    _setup_logging(level=level, fmt=fmt)

# Fin del archivo backend/app/core/logging.py
