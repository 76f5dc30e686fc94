# -*- coding: utf-8 -*-
"""
backend/app/core/__init__.py

Fachada para componentes centrales del backend:
- Configuración (settings)
- Logging

Autor: Ixchel Beristain
Fecha: 2026-10-05
"""

from .settings import get_settings
from .logging import setup_logging

__all__ = [
    "get_settings",
    "setup_logging",
]

# Fin del archivo backend/app/core/__init__.py
