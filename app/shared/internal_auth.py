# -*- coding: utf-8 -*-
"""
backend/app/shared/internal_auth.py

Autenticación de servicio interno para endpoints que no invoca el usuario:
callback de ingesta de videos (motor de workflows) y reaper (cron externo).

Separado de modules/auth/dependencies.py (JWT de usuario).

Uso:
    from app.shared.internal_auth import InternalServiceAuth

Autor: Adlibify
Fecha: 2026-10-19
"""

from __future__ import annotations

import logging
import secrets
from typing import Annotated

from fastapi import Depends, Header, HTTPException, status

from app.shared.config.config_loader import get_settings

logger = logging.getLogger(__name__)


async def require_internal_service_token(
    authorization: Annotated[str | None, Header()] = None,
) -> bool:
    """
    Valida Authorization: Bearer <APP_SERVICE_TOKEN>.

    Raises:
        HTTPException 500: token no configurado en el backend.
        HTTPException 401: sin header o formato inválido.
        HTTPException 403: token incorrecto.
    """
    settings = get_settings()

    if not settings.internal_service_token:
        logger.error("internal_service_token_not_configured")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "service_token_not_configured", "message": "Internal service token not configured"},
        )

    if not authorization:
        logger.warning("internal_auth_missing_header")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error": "authorization_required", "message": "Authorization header required"},
            headers={"WWW-Authenticate": "Bearer"},
        )

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        logger.warning("internal_auth_invalid_format")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error": "authorization_required", "message": "Use: Bearer <token>"},
            headers={"WWW-Authenticate": "Bearer"},
        )

    expected = settings.internal_service_token.get_secret_value()
    if not secrets.compare_digest(parts[1], expected):
        logger.warning("internal_auth_invalid_token")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={"error": "invalid_service_token", "message": "Invalid service token"},
        )

    return True


InternalServiceAuth = Annotated[bool, Depends(require_internal_service_token)]


__all__ = [
    "require_internal_service_token",
    "InternalServiceAuth",
]
