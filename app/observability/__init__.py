# -*- coding: utf-8 -*-
"""
backend/app/observability/__init__.py

Métricas Prometheus (HTTP y de negocio) y endpoint /metrics.
"""

from .prom import setup_observability

__all__ = ["setup_observability"]
