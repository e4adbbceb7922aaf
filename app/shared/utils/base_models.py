# -*- coding: utf-8 -*-
"""
backend/app/shared/utils/base_models.py

Modelo base para esquemas Pydantic de la API de Adlibify.

- JSON en camelCase (userId, generationId, creditsAdded...) como lo consume
  el frontend y el motor de workflows; en Python se usan nombres snake_case.
- from_attributes para construir respuestas desde modelos ORM.
- Reexporta EmailStr y Field.

Autor: Adlibify
Fecha: 2026-10-19
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,            # acepta tanto user_id como userId
        alias_generator=to_camel,
        str_strip_whitespace=True,
    )

__all__ = ["ApiModel", "EmailStr", "Field"]
# Fin del archivo base_models.py
