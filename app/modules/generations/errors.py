# -*- coding: utf-8 -*-
"""
backend/app/modules/generations/errors.py

Errores de dominio del módulo de generaciones.

Autor: Adlibify
Fecha: 2026-10-19
"""

from app.shared.errors import DomainError, NotFoundError, UpstreamError, ValidationError


class MissingFieldsError(ValidationError):
    error_code = "missing_required_fields"


class InsufficientCreditsError(DomainError):
    """El usuario no tiene créditos: el frontend muestra el paywall."""

    status_code = 402
    error_code = "insufficient_credits"
    default_message = "You need at least 1 credit to generate a video. Purchase a credit pack to continue."

    def __init__(self, message=None, **extra):
        extra.setdefault("upgrade_required", True)
        super().__init__(message, **extra)


class GenerationNotFoundError(NotFoundError):
    error_code = "generation_not_found"
    default_message = "Generation not found"


class GenerationStateConflictError(DomainError):
    """La generación ya está en un estado terminal."""

    status_code = 409
    error_code = "generation_not_processing"
    default_message = "Generation is no longer processing"


class VideoFetchError(UpstreamError):
    error_code = "video_fetch_failed"
    default_message = "Failed to fetch video from URL"


class VideoStorageError(UpstreamError):
    error_code = "video_storage_failed"
    default_message = "Failed to upload video"


__all__ = [
    "MissingFieldsError",
    "InsufficientCreditsError",
    "GenerationNotFoundError",
    "GenerationStateConflictError",
    "VideoFetchError",
    "VideoStorageError",
]
