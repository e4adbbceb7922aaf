# -*- coding: utf-8 -*-
"""
backend/app/modules/profiles/schemas.py

Esquemas Pydantic del módulo de perfiles.

Autor: Adlibify
Fecha: 2026-10-19
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from app.shared.utils.base_models import ApiModel, EmailStr, Field
from .enums import ProfileRole


class ProfileRegisterRequest(ApiModel):
    """Datos capturados en el alta (email/contraseña u OTP por teléfono)."""

    email: Optional[EmailStr] = None
    full_name: Optional[str] = Field(default=None, max_length=200)
    phone: Optional[str] = Field(default=None, max_length=32)
    country_code: Optional[str] = Field(default=None, max_length=8)


class ProfileResponse(ApiModel):
    id: UUID
    full_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    country_code: str
    phone_verified: bool
    credits: int
    role: ProfileRole
    updated_at: datetime


__all__ = ["ProfileRegisterRequest", "ProfileResponse"]
