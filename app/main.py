# -*- coding: utf-8 -*-
"""
backend/app/main.py

Punto de entrada principal del backend Adlibify.

Ajustes clave:
- .env cargado antes de cualquier import que lea configuración.
- Logging vía dictConfig (LOG_LEVEL / LOG_FORMAT).
- Scheduler con el reaper de generaciones colgadas.
- CORS por ruta: /api/workflows/proxy abierto a cualquier origen,
  el resto según CORS_ORIGINS.
- Errores de dominio → JSON {success, error, message}.
- Observabilidad Prometheus (/metrics).

Autor: Adlibify
Fecha: 2026-10-19
"""

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

# ---------------------------------------------------------------------------
# Cargar .env ANTES de cualquier import que use os.getenv
# En PROD: override=False para respetar variables del entorno
# ---------------------------------------------------------------------------
from dotenv import load_dotenv

_ENV_PATH = Path(__file__).resolve().parents[1] / ".env"
_PYTHON_ENV = os.getenv("PYTHON_ENV", "development").strip().strip('"').strip("'").lower()
load_dotenv(dotenv_path=_ENV_PATH, override=_PYTHON_ENV == "development")

import anyio
import uvicorn
from fastapi import FastAPI, HTTPException, Request

from app.shared.config import settings
from app.shared.config.logging_config import setup_logging

setup_logging(settings.log_level, settings.log_format)
logger = logging.getLogger(__name__)

from app.modules.generations.jobs import register_generation_reaper_job
from app.modules.workflows.routes import PROXY_PATH
from app.observability.prom import setup_observability
from app.routes import router as main_router
from app.routes.master_routes import API_PREFIX
from app.shared.errors import DomainError
from app.shared.middleware import JSONExceptionMiddleware, PathAwareCORSMiddleware, domain_error_handler
from app.shared.scheduler import get_scheduler
from app.shared.utils.json_response import UTF8JSONResponse, json_response_utf8


@asynccontextmanager
async def lifespan(app: FastAPI):
    # ────────── STARTUP ──────────
    scheduler = get_scheduler()
    if settings.scheduler_enabled:
        register_generation_reaper_job(
            interval_minutes=settings.generation_reaper_interval_minutes,
            timeout_minutes=settings.generation_timeout_minutes,
        )
        scheduler.start()
        logger.info("Scheduler iniciado con jobs programados")
    else:
        logger.info("Scheduler deshabilitado (SCHEDULER_ENABLED=false)")

    logger.info("Backend de %s iniciado (env=%s)", settings.app_name, settings.python_env)
    try:
        yield
    finally:
        # ────────── SHUTDOWN ──────────
        with anyio.CancelScope(shield=True):
            if scheduler.is_running:
                scheduler.shutdown(wait=True)
                logger.info("Scheduler detenido")
        logger.info("Backend de %s apagado.", settings.app_name)


openapi_tags = [
    {"name": "profiles", "description": "Perfil y saldo de créditos"},
    {"name": "generations", "description": "Generaciones de video"},
    {"name": "workflows", "description": "Proxy a los webhooks del motor de workflows"},
    {"name": "billing", "description": "Packs de créditos, checkout y verificación de pagos"},
    {"name": "internal", "description": "Endpoints de servicio (APP_SERVICE_TOKEN)"},
]

app = FastAPI(
    title="Adlibify API",
    description="API de generación de videos con créditos prepagados",
    version=settings.app_version,
    lifespan=lifespan,
    openapi_tags=openapi_tags,
    default_response_class=UTF8JSONResponse,
)


def _cors_kwargs() -> dict:
    origins = settings.get_cors_origins()
    if origins == ["*"]:
        # "*" con allow_credentials=True es inválido en navegadores
        return {
            "allow_origins": ["*"],
            "allow_credentials": False,
            "allow_methods": ["*"],
            "allow_headers": ["*"],
            "max_age": 600,
        }
    return {
        "allow_origins": origins,
        "allow_credentials": True,
        "allow_methods": ["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
        "allow_headers": ["*"],
        "max_age": 600,
    }


# IMPORTANTE: el orden real de ejecución de middlewares en Starlette es inverso al registro.
# CORS se registra AL FINAL para ejecutarse primero (outermost).
app.add_middleware(JSONExceptionMiddleware)
setup_observability(app, http_metrics=settings.http_metrics_enabled)
app.add_middleware(
    PathAwareCORSMiddleware,
    open_paths=[f"{API_PREFIX}{PROXY_PATH}"],
    **_cors_kwargs(),
)

app.add_exception_handler(DomainError, domain_error_handler)


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """HTTPException con charset UTF-8 (mensajes con acentos)."""
    return json_response_utf8(
        content={"detail": exc.detail},
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


app.include_router(main_router)


if __name__ == "__main__":
    uvicorn.run(
        "app.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.is_dev,
    )

# Fin del archivo backend/app/main.py
