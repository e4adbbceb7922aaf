# -*- coding: utf-8 -*-
"""
backend/app/shared/middleware/exception_handler.py

Manejo de errores a nivel app:
- JSONExceptionMiddleware: excepciones no manejadas → 500 JSON con request_id.
- domain_error_handler: DomainError → JSON {success, error, message}.

Autor: Adlibify
Fecha: 2026-10-19
"""

from __future__ import annotations

import logging
import uuid
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from app.shared.errors import DomainError
from app.shared.utils.json_response import json_response_utf8

logger = logging.getLogger(__name__)

REQUEST_ID_HEADERS = ["x-request-id", "x-correlation-id"]


def get_request_id(request: Request) -> str:
    """Extrae request_id de headers o genera uno nuevo."""
    for header in REQUEST_ID_HEADERS:
        value = request.headers.get(header)
        if value:
            return value
    return uuid.uuid4().hex[:16]


class JSONExceptionMiddleware(BaseHTTPMiddleware):
    """
    Captura excepciones no manejadas y devuelve JSON.

    Garantiza Content-Type JSON, error_code estable para UI
    y request_id para correlación de logs.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = get_request_id(request)
        request.state.request_id = request_id

        try:
            return await call_next(request)
        except Exception as e:
            logger.exception(
                "unhandled_exception request_id=%s method=%s path=%s error=%r",
                request_id,
                request.method,
                request.url.path,
                e,
            )
            return json_response_utf8(
                content={
                    "success": False,
                    "error": "internal_server_error",
                    "message": "Internal server error",
                    "request_id": request_id,
                },
                status_code=500,
                headers={"X-Request-ID": request_id},
            )


async def domain_error_handler(request: Request, exc: DomainError) -> Response:
    level = logging.WARNING if exc.status_code < 500 else logging.ERROR
    logger.log(
        level,
        "domain_error path=%s code=%s status=%s message=%s",
        request.url.path,
        exc.error_code,
        exc.status_code,
        exc.message,
    )
    return json_response_utf8(content=exc.to_dict(), status_code=exc.status_code)


__all__ = ["JSONExceptionMiddleware", "domain_error_handler", "get_request_id"]
