# -*- coding: utf-8 -*-
"""
backend/app/shared/config/settings_testing.py

Overrides para entorno de PRUEBAS (test) usando Pydantic v2.
Determinista: SQLite en memoria, scheduler apagado y secretos dummy.

Autor: Adlibify
Fecha: 2026-10-19
"""

from typing import Optional

from pydantic import SecretStr
from pydantic_settings import SettingsConfigDict

from .settings_base import BaseAppSettings


class EnvTestingSettings(BaseAppSettings):
    # --- Identidad de entorno ---
    python_env: str = "test"

    # --- Logging en test: menos ruido ---
    log_level: str = "WARNING"
    log_format: str = "pretty"

    # --- Base de datos aislada ---
    db_url: Optional[str] = "sqlite+aiosqlite:///:memory:"

    # --- Auth ---
    jwt_secret_key: SecretStr = SecretStr("test-secret-key-with-at-least-32-chars")
    internal_service_token: Optional[SecretStr] = SecretStr("test-service-token")

    # --- Integraciones con valores dummy ---
    supabase_url: Optional[str] = "https://storage.test"
    supabase_service_role_key: Optional[SecretStr] = SecretStr("service-role-test")
    n8n_webhook_ugc_product: Optional[str] = "https://n8n.test/webhook/ugc-product"
    n8n_webhook_service_business: Optional[str] = "https://n8n.test/webhook/service-business"
    n8n_webhook_software_ui: Optional[str] = "https://n8n.test/webhook/software-ui"

    # --- Jobs ---
    scheduler_enabled: bool = False
    http_metrics_enabled: bool = False

    model_config = SettingsConfigDict(
        env_file=".env.test",
        env_file_encoding="utf-8",
        extra="ignore",
    )


__all__ = ["EnvTestingSettings"]
# Fin del archivo backend\app\shared\config\settings_testing.py
