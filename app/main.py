# -*- coding: utf-8 -*-
"""
backend/app/main.py

Punto de entrada principal del backend CourseStore.

Ajustes clave:
- Carga de .env antes de leer configuración.
- Logging estructurado vía app.core.logging (python-json-logger en LOG_FORMAT=json).
- Cliente HTTP global (httpx) creado en startup y cerrado en shutdown.
- Observabilidad Prometheus (/metrics) vía app.observability.prom.
- Handlers de error JSON {"error": "..."} con charset UTF-8.
- CORS desde CORS_ORIGINS.

Autor: Ixchel Beristain
Fecha: 2026-10-10
"""

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

# ---------------------------------------------------------------------------
# Cargar .env ANTES de cualquier import que lea configuración
# En PROD: override=False para respetar variables del entorno
# ---------------------------------------------------------------------------
from dotenv import load_dotenv

_ENV_PATH = Path(__file__).resolve().parents[1] / ".env"  # backend/.env
_PYTHON_ENV = os.getenv("PYTHON_ENV", "development").strip().lower()
load_dotenv(dotenv_path=_ENV_PATH, override=_PYTHON_ENV == "development")

import anyio
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.logging import setup_logging
from app.core.settings import get_settings
from app.observability.prom import setup_observability
from app.shared.core.http_client_cache import close_http_client, create_http_client
from app.shared.middleware.exception_handler import register_exception_handlers
from app.shared.utils.json_response import UTF8JSONResponse

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # ────────── STARTUP ──────────
    await create_http_client()
    logger.info("🟢 Backend de CourseStore iniciado (env=%s)", get_settings().python_env)
    try:
        yield
    finally:
        # ────────── SHUTDOWN ──────────
        with anyio.CancelScope(shield=True):
            await close_http_client()
        logger.info("🔴 Backend de CourseStore apagado.")


openapi_tags = [
    {"name": "refunds", "description": "Elegibilidad y liquidación de reembolsos"},
    {"name": "health", "description": "Estado del servicio"},
]


def _configure_cors(app_instance: FastAPI) -> None:
    """
    Configura CORS desde CORS_ORIGINS.

    "*" con allow_credentials=True es inválido en navegadores, así que el
    modo wildcard desactiva credenciales.
    """
    settings = get_settings()
    origins = settings.get_cors_origins()

    if settings.is_prod and (not origins or origins == ["*"]):
        logger.error("❌ CORS DISABLED: CORS_ORIGINS vacío o wildcard en producción")
        return

    wildcard = origins == ["*"]
    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=origins or [settings.frontend_url],
        allow_credentials=not wildcard,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
        max_age=600,
    )
    logger.info("🌐 CORS habilitado para %s", origins)


def create_app() -> FastAPI:
    settings = get_settings()

    application = FastAPI(
        title=f"{settings.app_name} API",
        description="API de reembolsos de la tienda de cursos",
        version=settings.app_version,
        lifespan=lifespan,
        openapi_tags=openapi_tags,
        default_response_class=UTF8JSONResponse,
    )

    # Starlette ejecuta los middlewares en orden inverso al registro:
    # CORS se registra al final para ser el más externo.
    setup_observability(application)
    _configure_cors(application)
    register_exception_handlers(application)

    from app.routes import router as main_router

    application.include_router(main_router)
    return application


app = create_app()


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run("app.main:app", host=_settings.app_host, port=_settings.app_port, reload=_settings.is_dev)

# Fin del archivo backend/app/main.py
