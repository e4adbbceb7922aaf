# -*- coding: utf-8 -*-
"""
backend/app/shared/errors.py

Excepción base de dominio.

Los servicios lanzan subclases con un `error_code` estable y el status HTTP
con el que deben exponerse; main.py registra un handler que las convierte en
{"success": false, "error": <code>, "message": <texto>}.

Autor: Adlibify
Fecha: 2026-10-19
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic.alias_generators import to_camel


class DomainError(Exception):
    status_code: int = 400
    error_code: str = "domain_error"
    default_message: str = "Request could not be processed"

    def __init__(self, message: Optional[str] = None, **extra: Any):
        self.message = message or self.default_message
        self.extra: Dict[str, Any] = extra
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        extras = {to_camel(key): value for key, value in self.extra.items()}
        return {"success": False, "error": self.error_code, "message": self.message, **extras}


class ValidationError(DomainError):
    status_code = 400
    error_code = "validation_error"
    default_message = "Missing required fields"


class NotFoundError(DomainError):
    status_code = 404
    error_code = "not_found"
    default_message = "Resource not found"


class UpstreamError(DomainError):
    """Proveedor externo (billing, workflow, storage) falló o respondió mal."""

    status_code = 502
    error_code = "upstream_error"
    default_message = "Upstream provider error"


__all__ = ["DomainError", "ValidationError", "NotFoundError", "UpstreamError"]
