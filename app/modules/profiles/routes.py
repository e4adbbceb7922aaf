# -*- coding: utf-8 -*-
"""
backend/app/modules/profiles/routes.py

Endpoints de perfil del usuario autenticado.

- POST /profiles     → alta idempotente (201 la primera vez, 200 después)
- GET  /profiles/me  → perfil y saldo de créditos

Autor: Adlibify
Fecha: 2026-10-19
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.auth.dependencies import get_current_user_id
from app.shared.config import settings
from app.shared.database.database import get_async_session
from .schemas import ProfileRegisterRequest, ProfileResponse
from .services import ProfileService

router = APIRouter(prefix="/profiles", tags=["profiles"])


def get_profile_service() -> ProfileService:
    return ProfileService(signup_credits=settings.signup_credits)


@router.post("", response_model=ProfileResponse, status_code=status.HTTP_201_CREATED)
async def register_profile(
    body: ProfileRegisterRequest,
    response: Response,
    user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_async_session),
    service: ProfileService = Depends(get_profile_service),
):
    result = await service.register(
        session,
        user_id,
        email=body.email,
        full_name=body.full_name,
        phone=body.phone,
        country_code=body.country_code,
    )
    if not result.created:
        response.status_code = status.HTTP_200_OK
    return result.profile


@router.get("/me", response_model=ProfileResponse)
async def get_my_profile(
    user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_async_session),
    service: ProfileService = Depends(get_profile_service),
):
    return await service.get_profile(session, user_id)


__all__ = ["router", "get_profile_service"]
