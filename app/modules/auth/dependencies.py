# -*- coding: utf-8 -*-
"""
backend/app/modules/auth/dependencies.py

Dependencias de autenticación JWT para FastAPI.

Provee:
- validate_jwt_token: valida token y devuelve el UUID del usuario
- get_current_user_id: dependencia FastAPI (Authorization: Bearer)

NOTA: La autenticación de servicio interno (InternalServiceAuth) está en
app.shared.internal_auth.

Autor: Adlibify
Fecha: 2026-10-19
"""

from __future__ import annotations

import logging
from typing import Optional
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials

from .security import bearer_scheme, decode_access_token, TokenDecodeError

logger = logging.getLogger(__name__)


def _unauthorized(message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={"error": "invalid_token", "message": message},
        headers={"WWW-Authenticate": "Bearer"},
    )


def validate_jwt_token(token: str) -> UUID:
    """
    Valida un JWT y extrae el user_id (claim 'sub').

    Raises:
        HTTPException 401: token inválido, expirado o con 'sub' no UUID.
    """
    try:
        payload = decode_access_token(token)
    except TokenDecodeError as e:
        raise _unauthorized(str(e)) from e

    try:
        return UUID(str(payload["sub"]))
    except ValueError as e:
        logger.warning("jwt_sub_not_uuid sub=%s", payload.get("sub"))
        raise _unauthorized("Token does not contain a valid user identifier") from e


async def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> UUID:
    """Dependencia de autenticación para endpoints de usuario."""
    if credentials is None or not credentials.credentials:
        raise _unauthorized("Authorization header required")
    return validate_jwt_token(credentials.credentials)


__all__ = [
    "get_current_user_id",
    "validate_jwt_token",
]
