# -*- coding: utf-8 -*-
"""
backend/app/shared/config/logging_config.py

Configuración centralizada de logging para el backend de la tienda de cursos.
Soporta formato plain (desarrollo) y json (producción) mediante dictConfig.

Los módulos obtienen su logger con logging.getLogger(__name__); el logger
"refunds" agrupa los eventos de auditoría del flujo de reembolsos.

Autor: Ixchel Beristain
Fecha: 2026-10-05
"""

import logging.config
from typing import Literal


def setup_logging(
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO",
    fmt: Literal["plain", "pretty", "json"] = "plain"
) -> None:
    """
    Configura el sistema de logging de la aplicación.

    Args:
        level: Nivel de logging (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        fmt: Formato de salida (plain, pretty, json)

    Ejemplos:
        >>> setup_logging("INFO", "plain")
        >>> setup_logging("WARNING", "json")
    """
    # pretty == plain para efectos prácticos
    use_json = fmt == "json"

    handlers = {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "json" if use_json else "default",
            "stream": "ext://sys.stdout",
        }
    }

    formatters = {
        "default": {
            "format": "%(asctime)s %(levelname)s [%(name)s]: %(message)s"
        },
        "json": {
            "()": "pythonjsonlogger.json.JsonFormatter",
            "format": "%(asctime)s %(name)s %(levelname)s %(message)s",
        },
    }

    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": formatters,
        "handlers": handlers,
        "loggers": {
            # Auditoría de reembolsos: siempre al menos INFO
            "refunds": {"level": "INFO", "propagate": True},
            # Evitar ruido del cliente HTTP
            "httpx": {"level": "WARNING", "propagate": True},
        },
        "root": {
            "handlers": ["console"],
            "level": level.upper(),
        },
    }

    logging.config.dictConfig(logging_config)


__all__ = ["setup_logging"]
# Fin del archivo backend/app/shared/config/logging_config.py
