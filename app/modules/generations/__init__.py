# -*- coding: utf-8 -*-
"""
backend/app/modules/generations/__init__.py

Módulo de generaciones de video: ledger, despacho a workflows,
ingesta del video terminado y reaper de generaciones colgadas.
"""

from .enums import GenerationStatus, WorkflowCategory, WorkflowType
from .models import Generation
from .repositories import GenerationRepository

__all__ = [
    "Generation",
    "GenerationRepository",
    "GenerationStatus",
    "WorkflowCategory",
    "WorkflowType",
]
