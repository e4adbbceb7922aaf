# -*- coding: utf-8 -*-
"""
backend/app/modules/profiles/services.py

Servicio de perfiles: alta al registrarse (con el crédito de bienvenida)
y lectura del perfil/saldo.

Autor: Adlibify
Fecha: 2026-10-19
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.observability.business_metrics import CREDITS_ADDED
from app.shared.errors import NotFoundError
from .enums import ProfileRole
from .models import Profile
from .repositories import ProfileRepository

logger = logging.getLogger(__name__)

DEFAULT_COUNTRY_CODE = "+61"


class ProfileNotFoundError(NotFoundError):
    error_code = "profile_not_found"
    default_message = "Profile not found"


@dataclass
class RegistrationResult:
    profile: Profile
    created: bool


class ProfileService:
    """Alta y consulta de perfiles."""

    def __init__(
        self,
        profile_repo: Optional[ProfileRepository] = None,
        signup_credits: int = 1,
    ):
        self.profile_repo = profile_repo or ProfileRepository()
        self.signup_credits = signup_credits

    async def register(
        self,
        session: AsyncSession,
        user_id: UUID,
        *,
        email: Optional[str],
        full_name: Optional[str] = None,
        phone: Optional[str] = None,
        country_code: Optional[str] = None,
    ) -> RegistrationResult:
        """
        Crea el perfil con el saldo inicial de bienvenida.

        Idempotente: si el perfil ya existe se devuelve sin tocarlo, de modo
        que repetir el alta no otorga un segundo crédito.
        """
        existing = await self.profile_repo.get_by_id(session, user_id)
        if existing is not None:
            logger.debug("Profile already registered: user=%s", user_id)
            return RegistrationResult(profile=existing, created=False)

        try:
            async with session.begin_nested():
                profile = await self.profile_repo.create(
                    session,
                    id=user_id,
                    email=email,
                    full_name=full_name,
                    phone=phone,
                    country_code=country_code or DEFAULT_COUNTRY_CODE,
                    phone_verified=bool(phone),
                    credits=self.signup_credits,
                    role=ProfileRole.FREE,
                )
        except IntegrityError:
            # Alta concurrente del mismo usuario: gana la primera
            profile = await self.profile_repo.get_by_id(session, user_id)
            if profile is None:
                raise
            return RegistrationResult(profile=profile, created=False)

        await session.commit()
        if self.signup_credits:
            CREDITS_ADDED.labels("signup").inc(self.signup_credits)
        logger.info(
            "Profile registered: user=%s credits=%d phone_verified=%s",
            user_id, profile.credits, profile.phone_verified,
        )
        return RegistrationResult(profile=profile, created=True)

    async def get_profile(self, session: AsyncSession, user_id: UUID) -> Profile:
        profile = await self.profile_repo.get_by_id(session, user_id)
        if profile is None:
            raise ProfileNotFoundError()
        return profile


__all__ = ["ProfileService", "ProfileNotFoundError", "RegistrationResult"]
