# -*- coding: utf-8 -*-
"""
backend/app/shared/config/settings_prod.py

Overrides para entorno de PRODUCCIÓN usando Pydantic v2.

- Solo variables de entorno / secret stores (sin .env).
- Logging INFO en JSON.
- Stripe en modo live y correos reales vía MailerSend.
- Timeouts de LearnWorlds más cortos: una consulta de progreso lenta
  no debe retener la request de elegibilidad.

Las credenciales obligatorias (JWT, Stripe, LearnWorlds, MailerSend) se
validan en BaseAppSettings._security_checks(), que invoca config_loader.

Autor: Ixchel Beristain
Fecha: 2026-10-05
"""

from typing import Literal

from pydantic_settings import SettingsConfigDict

from .settings_base import BaseAppSettings


class ProdSettings(BaseAppSettings):
    python_env: Literal["development", "test", "production"] = "production"

    # --- Logging estructurado ---
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "pretty", "plain"] = "json"

    # --- Base de datos ---
    db_sslmode: str = "require"

    # --- Reembolsos contra Stripe live ---
    stripe_mode: Literal["test", "live"] = "live"

    # --- LearnWorlds ---
    learnworlds_timeout_sec: float = 8.0

    # --- Correo transaccional real ---
    email_mode: Literal["console", "api"] = "api"

    model_config = SettingsConfigDict(
        env_file=None,
        extra="ignore",
    )


__all__ = ["ProdSettings"]

# Fin del archivo backend/app/shared/config/settings_prod.py
