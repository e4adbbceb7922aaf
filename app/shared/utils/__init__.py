# -*- coding: utf-8 -*-
"""
backend/app/shared/utils/__init__.py

Exportación de utilidades comunes: modelo base de esquemas y respuestas JSON UTF-8.

Autor: Adlibify
Fecha: 2026-10-19
"""

from .base_models import ApiModel, EmailStr, Field
from .json_response import UTF8JSONResponse, json_response_utf8

__all__ = [
    "ApiModel",
    "EmailStr",
    "Field",
    "UTF8JSONResponse",
    "json_response_utf8",
]
