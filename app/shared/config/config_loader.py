# -*- coding: utf-8 -*-
"""
backend/app/shared/config/config_loader.py

Selección de settings de Adlibify según PYTHON_ENV:

- development → DevSettings: .env local, webhooks de n8n opcionales,
  Stripe en modo test.
- test → EnvTestingSettings: SQLite en memoria, scheduler apagado,
  URLs de Storage/n8n ficticias.
- production → ProdSettings: exige JWT fuerte, APP_SERVICE_TOKEN,
  Supabase Storage y Stripe si PAYMENTS_ENABLED.

Los valores se normalizan igual que en main.py (comillas de .env,
mayúsculas) y se aceptan los alias cortos "dev", "testing" y "prod".

Autor: Adlibify
Fecha: 2026-10-19
"""

import logging
import os
from functools import lru_cache

from .settings_base import BaseAppSettings
from .settings_dev import DevSettings
from .settings_prod import ProdSettings
from .settings_testing import EnvTestingSettings

logger = logging.getLogger(__name__)

_ALIASES = {"dev": "development", "testing": "test", "prod": "production"}

_ENVIRONMENTS: dict[str, type[BaseAppSettings]] = {
    "development": DevSettings,
    "test": EnvTestingSettings,
    "production": ProdSettings,
}


def resolve_environment(raw: str | None) -> str:
    """Nombre canónico del entorno para el valor crudo de PYTHON_ENV."""
    env = (raw or "development").strip().strip('"').strip("'").lower()
    env = _ALIASES.get(env, env)
    if env not in _ENVIRONMENTS:
        logger.warning("PYTHON_ENV=%r no reconocido; usando development", raw)
        return "development"
    return env


@lru_cache(maxsize=1)
def get_settings() -> BaseAppSettings:
    """
    Instancia cacheada de settings para el entorno actual.

    Raises:
        ValueError: si las validaciones de seguridad de producción fallan
    """
    env = resolve_environment(os.getenv("PYTHON_ENV"))
    settings = _ENVIRONMENTS[env](python_env=env)
    settings.security_checks()
    return settings


__all__ = ["get_settings", "resolve_environment"]
# Fin del archivo backend/app/shared/config/config_loader.py
