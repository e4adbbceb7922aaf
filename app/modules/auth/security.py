# -*- coding: utf-8 -*-
"""
backend/app/modules/auth/security.py

Validación de JWT emitidos por el proveedor de identidad (Supabase Auth):
- Esquema Bearer para extraer el token
- Decodificación / validación (python-jose)
- create_access_token para herramientas internas y tests

El alta con email/contraseña y la verificación OTP por teléfono ocurren en
el proveedor; este backend solo confía en el claim 'sub' del token firmado.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Union

from fastapi.security import HTTPBearer
from jose import JWTError, jwt  # pip install "python-jose[cryptography]"

from app.shared.config.config_loader import get_settings

# auto_error=False: la ausencia de token se reporta como 401 desde dependencies
bearer_scheme = HTTPBearer(auto_error=False)


class TokenDecodeError(Exception):
    """Error al decodificar/validar un token JWT."""


def create_access_token(
    subject: Union[str, Any],
    expires_delta: Optional[timedelta] = None,
    **extra: Any,
) -> str:
    """
    Crea un JWT con la misma forma que emite el proveedor:
    claims sub, aud (si está configurado), iat y exp.
    """
    settings = get_settings()
    now = datetime.now(tz=timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))
    to_encode: Dict[str, Any] = {"sub": str(subject), "iat": int(now.timestamp()), "exp": int(expire.timestamp())}
    if settings.jwt_audience:
        to_encode["aud"] = settings.jwt_audience
    if extra:
        to_encode.update(extra)
    return jwt.encode(to_encode, settings.jwt_secret_key.get_secret_value(), algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Decodifica y valida un JWT. Lanza TokenDecodeError si es inválido/expirado.
    """
    settings = get_settings()
    options = {"verify_aud": bool(settings.jwt_audience)}
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key.get_secret_value(),
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            options=options,
        )
    except JWTError as e:
        raise TokenDecodeError("Token inválido o expirado") from e

    sub = payload.get("sub")
    if sub is None or not str(sub).strip():
        raise TokenDecodeError("Token sin 'sub'")
    return payload
# Fin del archivo
