# -*- coding: utf-8 -*-
"""
backend/app/shared/config/settings_base.py

Base de configuración (Pydantic v2) para Adlibify.
- Esta clase NO instancia singletons ni resuelve .env; eso lo hace config_loader.
- Es la base para settings_dev.py, settings_testing.py y settings_prod.py.

Autor: Adlibify
Fecha: 2026-10-19
"""

from typing import Literal, Optional
from pydantic import Field, HttpUrl, SecretStr, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Tipos de entorno soportados
EnvName = Literal["development", "test", "production"]


class BaseAppSettings(BaseSettings):
    # =========================
    # Núcleo de la aplicación
    # =========================
    python_env: EnvName = Field(default="development", validation_alias="PYTHON_ENV")
    app_name: str = Field(default="Adlibify", validation_alias="APP_NAME")
    app_version: str = Field(default="0.1.0", validation_alias="APP_VERSION")
    app_host: str = Field(default="0.0.0.0", validation_alias="APP_HOST")
    app_port: int = Field(default=8000, validation_alias="APP_PORT")
    debug: bool = Field(default=False, validation_alias="DEBUG")

    # =========================
    # Base de datos (PostgreSQL)
    # =========================
    db_user: str = Field(default="postgres", validation_alias="DB_USER")
    db_password: SecretStr = Field(default=SecretStr("postgres"), validation_alias="DB_PASSWORD")
    db_host: str = Field(default="localhost", validation_alias="DB_HOST")
    db_port: int = Field(default=5432, validation_alias="DB_PORT")
    db_name: str = Field(default="adlibify", validation_alias="DB_NAME")
    db_echo_sql: bool = Field(default=False, validation_alias="DB_ECHO_SQL")
    db_sslmode: str = Field(default="prefer", validation_alias="DB_SSLMODE")  # prefer|require|disable
    db_url: Optional[str] = Field(default=None, validation_alias="DB_URL")

    @computed_field  # type: ignore[misc]
    @property
    def database_url(self) -> str:
        """
        URL de conexión para SQLAlchemy async.
        Prioriza DB_URL si existe (normaliza postgres:// a asyncpg),
        si no la construye desde componentes individuales.
        """
        from urllib.parse import quote_plus

        if self.db_url:
            url = self.db_url
            if url.startswith("sqlite"):
                return url
            url = (
                url.replace("postgres://", "postgresql+asyncpg://")
                   .replace("postgresql://", "postgresql+asyncpg://")
            )
            if "sslmode=" not in url and self.db_sslmode:
                sep = "&" if "?" in url else "?"
                url = f"{url}{sep}sslmode={self.db_sslmode}"
            return url

        pw = quote_plus(self.db_password.get_secret_value())
        return (
            f"postgresql+asyncpg://{self.db_user}:{pw}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}?sslmode={self.db_sslmode}"
        )

    # =========================
    # Supabase Storage
    # =========================
    supabase_url: Optional[HttpUrl] = Field(default=None, validation_alias="SUPABASE_URL")
    supabase_service_role_key: Optional[SecretStr] = Field(default=None, validation_alias="SUPABASE_SERVICE_ROLE_KEY")
    supabase_video_bucket: str = Field(default="generated-videos", validation_alias="SUPABASE_VIDEO_BUCKET")
    storage_timeout_sec: float = Field(default=60.0, validation_alias="STORAGE_TIMEOUT_SEC")

    # =========================
    # CORS / Frontend
    # =========================
    allowed_origins: str = Field(default="*", validation_alias="CORS_ORIGINS")
    frontend_url: str = Field(default="http://localhost:8080", validation_alias="FRONTEND_URL")

    # =========================
    # Auth / JWT del proveedor de identidad
    # =========================
    jwt_secret_key: SecretStr = Field(default=SecretStr("please-change-me"), validation_alias="JWT_SECRET_KEY")
    jwt_algorithm: Literal["HS256", "RS256"] = Field(default="HS256", validation_alias="JWT_ALGORITHM")
    jwt_audience: Optional[str] = Field(default="authenticated", validation_alias="JWT_AUDIENCE")
    access_token_expire_minutes: int = Field(default=60, validation_alias="ACCESS_TOKEN_EXPIRE_MINUTES")

    # =========================
    # Internal Service Auth (motor de workflows / cron)
    # =========================
    internal_service_token: Optional[SecretStr] = Field(default=None, validation_alias="APP_SERVICE_TOKEN")

    # =========================
    # Workflows (n8n)
    # =========================
    n8n_webhook_ugc_product: Optional[str] = Field(default=None, validation_alias="N8N_WEBHOOK_UGC_PRODUCT")
    n8n_webhook_service_business: Optional[str] = Field(default=None, validation_alias="N8N_WEBHOOK_SERVICE_BUSINESS")
    n8n_webhook_software_ui: Optional[str] = Field(default=None, validation_alias="N8N_WEBHOOK_SOFTWARE_UI")
    workflow_timeout_sec: float = Field(default=30.0, validation_alias="WORKFLOW_TIMEOUT_SEC")

    # =========================
    # Créditos y generaciones
    # =========================
    signup_credits: int = Field(default=1, ge=0, validation_alias="SIGNUP_CREDITS")
    generation_timeout_minutes: int = Field(default=15, ge=1, validation_alias="GENERATION_TIMEOUT_MINUTES")
    generation_reaper_interval_minutes: int = Field(default=5, ge=1, validation_alias="GENERATION_REAPER_INTERVAL_MINUTES")
    video_fetch_timeout_sec: float = Field(default=120.0, validation_alias="VIDEO_FETCH_TIMEOUT_SEC")
    scheduler_enabled: bool = Field(default=True, validation_alias="SCHEDULER_ENABLED")

    # =========================
    # Observabilidad / Logging
    # =========================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_format: Literal["json", "pretty", "plain"] = Field(default="pretty", validation_alias="LOG_FORMAT")
    http_metrics_enabled: bool = Field(default=True, validation_alias="HTTP_METRICS_ENABLED")

    # ===== Helpers de entorno =====
    @computed_field  # type: ignore[misc]
    @property
    def is_dev(self) -> bool:
        return self.python_env == "development"

    @computed_field  # type: ignore[misc]
    @property
    def is_test(self) -> bool:
        return self.python_env == "test"

    @computed_field  # type: ignore[misc]
    @property
    def is_prod(self) -> bool:
        return self.python_env == "production"

    def workflow_webhook_urls(self) -> dict[str, Optional[str]]:
        """URL de webhook por categoría de workflow."""
        return {
            "ugc-product": self.n8n_webhook_ugc_product,
            "service-business": self.n8n_webhook_service_business,
            "software-ui": self.n8n_webhook_software_ui,
        }

    def supabase_public_base(self) -> Optional[str]:
        if not self.supabase_url:
            return None
        return str(self.supabase_url).rstrip("/")

    # ===== Utilidad para normalizar CORS =====
    def get_cors_origins(self) -> list[str]:
        """Convierte allowed_origins en lista procesable para CORS middleware."""
        if not self.allowed_origins or self.allowed_origins == "*":
            return ["*"]
        return [o.strip().strip('"').strip("'") for o in self.allowed_origins.split(",") if o.strip()]

    def security_checks(self) -> None:
        """
        Validaciones mínimas de seguridad y coherencia.
        Se invoca desde config_loader tras instanciar el settings.
        """
        import logging
        logger = logging.getLogger(__name__)

        jwt_key = self.jwt_secret_key.get_secret_value()
        weak_jwt = not jwt_key or jwt_key == "please-change-me" or len(jwt_key) < 32

        if self.is_prod:
            if weak_jwt:
                raise ValueError("JWT_SECRET_KEY debe tener ≥32 caracteres en producción")
            if self.db_sslmode != "require":
                raise ValueError("DB_SSLMODE debe ser 'require' en producción")
            if not self.internal_service_token:
                raise ValueError("APP_SERVICE_TOKEN es requerido en producción")
            if not self.supabase_url or not self.supabase_service_role_key:
                raise ValueError("SUPABASE_URL y SUPABASE_SERVICE_ROLE_KEY son requeridos en producción")
            from .settings_payments import get_payments_settings
            payments = get_payments_settings()
            if payments.payments_enabled and not payments.stripe_secret_key:
                raise ValueError("STRIPE_SECRET_KEY es requerido en producción con PAYMENTS_ENABLED=true")

        if self.is_dev:
            if weak_jwt:
                logger.info("JWT_SECRET_KEY es débil o usa valor por defecto")
            missing = [k for k, v in self.workflow_webhook_urls().items() if not v]
            if missing:
                logger.info("Workflows sin webhook configurado: %s", ", ".join(missing))

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


__all__ = ["BaseAppSettings", "EnvName"]
# Fin del archivo backend\app\shared\config\settings_base.py
