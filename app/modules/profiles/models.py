# -*- coding: utf-8 -*-
"""
backend/app/modules/profiles/models.py

Modelo ORM del perfil de usuario y su saldo de créditos.

Tabla: public.profiles

Columnas DB:
- id: UUID PRIMARY KEY (id del usuario en el proveedor de identidad)
- full_name, email, phone, country_code
- credits: INTEGER NOT NULL DEFAULT 0
- role: TEXT ('demo' | 'free' | 'premium')
- phone_verified: BOOLEAN NOT NULL DEFAULT false
- created_at / updated_at: TIMESTAMPTZ

Constraints:
- ck_profiles_credits_non_negative: credits >= 0

Autor: Adlibify
Fecha: 2026-10-19
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Boolean, CheckConstraint, DateTime, Integer, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from app.shared.database.base import Base, as_str_enum
from .enums import ProfileRole


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Profile(Base):
    __tablename__ = "profiles"
    __table_args__ = (
        CheckConstraint("credits >= 0", name="credits_non_negative"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)

    full_name: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(320), nullable=True, index=True)
    phone: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    country_code: Mapped[str] = mapped_column(String(8), nullable=False, default="+61")
    phone_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Solo lo modifican ProfileRepository.add_credits / debit_one_credit
    credits: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    role: Mapped[ProfileRole] = mapped_column(
        as_str_enum(ProfileRole, name="profile_role"),
        nullable=False,
        default=ProfileRole.FREE,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
    )

    def __repr__(self) -> str:
        return f"<Profile id={self.id} credits={self.credits} role={self.role}>"


__all__ = ["Profile", "utcnow"]
