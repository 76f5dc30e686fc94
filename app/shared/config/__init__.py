# -*- coding: utf-8 -*-
"""
backend/app/shared/config/__init__.py

Punto único de acceso a la configuración:
    from app.shared.config import settings, get_settings

`settings` es un proxy perezoso: no instancia la configuración al importar
(evita validaciones prematuras en tests) y delega cada atributo a la
instancia cacheada por config_loader.get_settings().
"""

from __future__ import annotations

from typing import Any

from .config_loader import get_settings
from .settings_base import BaseAppSettings


class _SettingsProxy:
    __slots__ = ()

    def __getattr__(self, name: str) -> Any:
        return getattr(get_settings(), name)


settings = _SettingsProxy()

__all__ = ["settings", "get_settings", "BaseAppSettings"]
# Fin del archivo
