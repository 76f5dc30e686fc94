# -*- coding: utf-8 -*-
"""
backend/app/shared/config/settings_dev.py

Overrides para entorno de DESARROLLO (dev) usando Pydantic v2.
Hereda de BaseAppSettings y ajusta únicamente valores específicos
del ambiente local de desarrollo.

Autor: Ixchel Beristain
Fecha: 2026-10-05
"""

from pydantic_settings import SettingsConfigDict

from .settings_base import BaseAppSettings


class DevSettings(BaseAppSettings):
    """Configuración para entorno de desarrollo."""

    # Entorno
    python_env: str = "development"

    # Logging
    log_level: str = "DEBUG"
    log_format: str = "plain"  # formato legible en consola

    # Base de datos
    db_sslmode: str = "disable"  # en desarrollo no se requiere SSL

    # Stripe en modo test durante dev
    stripe_mode: str = "test"

    # Correos solo a consola
    email_mode: str = "console"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


__all__ = ["DevSettings"]

# Fin del archivo backend/app/shared/config/settings_dev.py
