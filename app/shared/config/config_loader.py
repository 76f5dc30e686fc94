# -*- coding: utf-8 -*-
"""
backend/app/shared/config/config_loader.py

Selección de la clase de settings según PYTHON_ENV.

Un valor desconocido de PYTHON_ENV es un error de despliegue: se rechaza
en lugar de caer silenciosamente en desarrollo (con Stripe en modo test y
correos por consola). La instancia validada se cachea como singleton;
los tests llaman get_settings.cache_clear() tras cambiar el entorno.

Autor: Ixchel Beristain
Actualizado: 2026-10-18
"""

import logging
import os
from functools import lru_cache
from typing import Dict, Type

from .settings_base import BaseAppSettings
from .settings_dev import DevSettings
from .settings_prod import ProdSettings
from .settings_testing import EnvTestingSettings

logger = logging.getLogger(__name__)

SETTINGS_BY_ENV: Dict[str, Type[BaseAppSettings]] = {
    "development": DevSettings,
    "test": EnvTestingSettings,
    "production": ProdSettings,
}


def resolve_settings_class(env_name: str) -> Type[BaseAppSettings]:
    """Clase de settings para un nombre de entorno; ValueError si no existe."""
    try:
        return SETTINGS_BY_ENV[env_name]
    except KeyError:
        raise ValueError(
            f"PYTHON_ENV={env_name!r} no reconocido (usa {'|'.join(SETTINGS_BY_ENV)})"
        ) from None


@lru_cache(maxsize=1)
def get_settings() -> BaseAppSettings:
    """
    Devuelve la configuración del entorno actual.

    Raises:
        ValueError: PYTHON_ENV desconocido o faltan secretos de producción
    """
    env_name = os.getenv("PYTHON_ENV", "development")
    settings = resolve_settings_class(env_name)()
    settings._security_checks()

    logger.info(
        "Settings loaded: env=%s stripe_mode=%s email_mode=%s",
        settings.python_env,
        settings.stripe_mode,
        settings.email_mode,
    )
    return settings


__all__ = ["get_settings", "resolve_settings_class", "SETTINGS_BY_ENV"]

# Fin del archivo backend/app/shared/config/config_loader.py
