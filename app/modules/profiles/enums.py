# -*- coding: utf-8 -*-
"""
backend/app/modules/profiles/enums.py

Enums del perfil de usuario.

Autor: Adlibify
Fecha: 2026-10-19
"""

from enum import Enum


class ProfileRole(str, Enum):
    """Rol comercial del usuario (no confiere permisos administrativos)."""
    DEMO = "demo"
    FREE = "free"
    PREMIUM = "premium"


__all__ = ["ProfileRole"]
