# -*- coding: utf-8 -*-
"""
backend/app/__init__.py

Inicializador del paquete principal 'app' del backend de CourseStore.

Funciones:
- Asegura un event loop compatible con asyncpg/SQLAlchemy Async en Windows.
- Permite que los módulos internos puedan importarse como 'app.*'
  cuando la carpeta 'backend' se incluye en PYTHONPATH.

Autor: Ixchel Beristain
Fecha: 2026-10-05
"""

import sys
import asyncio

if sys.platform.startswith("win"):
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

# Fin del archivo backend/app/__init__.py
