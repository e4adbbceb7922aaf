# -*- coding: utf-8 -*-
"""
backend/app/modules/workflows/schemas.py

Autor: Adlibify
Fecha: 2026-10-19
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from app.shared.utils.base_models import ApiModel


class WorkflowProxyRequest(ApiModel):
    """{webhookUrl, payload}; ambos requeridos (se valida en la ruta para responder {error})."""

    webhook_url: Optional[str] = None
    payload: Optional[Dict[str, Any]] = None


__all__ = ["WorkflowProxyRequest"]
