# -*- coding: utf-8 -*-
"""
backend/app/shared/config/__init__.py

Punto único de acceso a la configuración:
    from app.shared.config import settings

`settings` es un proxy perezoso sobre get_settings(): no instancia nada al
importar, así los tests pueden fijar variables de entorno antes del primer
acceso.
"""

from __future__ import annotations

from typing import Any

from .config_loader import get_settings
from .settings_base import BaseAppSettings
from .settings_payments import PaymentsSettings, get_payments_settings


class _SettingsProxy:
    __slots__ = ()

    def __getattr__(self, name: str) -> Any:
        return getattr(get_settings(), name)

    def __repr__(self) -> str:
        return f"<SettingsProxy {type(get_settings()).__name__}>"


settings = _SettingsProxy()

__all__ = [
    "settings",
    "get_settings",
    "BaseAppSettings",
    "PaymentsSettings",
    "get_payments_settings",
]
# Fin del archivo
