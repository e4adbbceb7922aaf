# -*- coding: utf-8 -*-
"""
backend/tests/shared/test_settings.py

Autor: Adlibify
Fecha: 2026-10-19
"""

import pytest
from pydantic import SecretStr

from app.shared.config import get_settings
from app.shared.config.config_loader import resolve_environment
from app.shared.config.settings_base import BaseAppSettings


def test_test_environment_is_selected():
    settings = get_settings()

    assert settings.is_test
    assert settings.database_url.startswith("sqlite+aiosqlite")
    assert settings.scheduler_enabled is False


def test_database_url_normalizes_postgres_scheme():
    settings = BaseAppSettings(DB_URL="postgres://u:p@db:5432/app", DB_SSLMODE="require")

    assert settings.database_url == "postgresql+asyncpg://u:p@db:5432/app?sslmode=require"


def test_cors_origins_parsing():
    settings = BaseAppSettings(CORS_ORIGINS="https://a.test, 'https://b.test'")

    assert settings.get_cors_origins() == ["https://a.test", "https://b.test"]


def test_production_requires_strong_jwt_secret():
    settings = BaseAppSettings(PYTHON_ENV="production", JWT_SECRET_KEY=SecretStr("short"))

    with pytest.raises(ValueError):
        settings.security_checks()


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, "development"),
        ("'test'", "test"),
        (' "Production" ', "production"),
        ("prod", "production"),
        ("testing", "test"),
        ("staging", "development"),
    ],
)
def test_resolve_environment(raw, expected):
    assert resolve_environment(raw) == expected
