# -*- coding: utf-8 -*-
"""
backend/app/shared/config/settings_testing.py

Overrides para entorno de PRUEBAS (test) usando Pydantic v2.
Busca ser determinista y seguro: logging moderado, base de datos en memoria
y Stripe en modo prueba con claves dummy.

Autor: Ixchel Beristain
Fecha: 2026-10-05
"""

from typing import Optional

from pydantic import SecretStr
from .settings_base import BaseAppSettings
from pydantic_settings import SettingsConfigDict


class EnvTestingSettings(BaseAppSettings):
    # --- Identidad de entorno ---
    python_env: str = "test"

    # --- Logging en test: menos ruido ---
    log_level: str = "WARNING"
    log_format: str = "pretty"

    # --- Base de datos aislada (aiosqlite en memoria) ---
    db_url: Optional[str] = "sqlite+aiosqlite:///:memory:"

    # --- Auth ---
    jwt_secret_key: SecretStr = SecretStr("test-secret-for-refund-suite")

    # --- Stripe en modo test con valores dummy ---
    stripe_mode: str = "test"
    stripe_secret_key: SecretStr = SecretStr("sk_test_dummy")

    # --- LearnWorlds con credenciales dummy ---
    learnworlds_base_url: str = "https://learnworlds.test"
    learnworlds_api_token: SecretStr = SecretStr("lw_test_token")
    learnworlds_client_id: str = "lw_test_client"

    email_mode: str = "console"

    model_config = SettingsConfigDict(
        env_file=".env.test",
        env_file_encoding="utf-8",
        extra="ignore",
    )


__all__ = ["EnvTestingSettings"]

# Fin del archivo backend/app/shared/config/settings_testing.py
