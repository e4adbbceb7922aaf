# -*- coding: utf-8 -*-
"""
backend/app/modules/generations/services/__init__.py

Servicios del módulo de generaciones.
"""

from .dispatch_service import (
    DispatchResult,
    GenerationDispatchService,
    build_payload,
    validate_request,
)
from .ingestion_service import IngestionResult, VideoIngestionService

__all__ = [
    "GenerationDispatchService",
    "DispatchResult",
    "validate_request",
    "build_payload",
    "VideoIngestionService",
    "IngestionResult",
]
