# -*- coding: utf-8 -*-
"""
backend/app/shared/middleware/__init__.py

Módulo de middlewares compartidos.
"""

from .cors import PathAwareCORSMiddleware
from .exception_handler import JSONExceptionMiddleware, domain_error_handler, get_request_id

__all__ = [
    "PathAwareCORSMiddleware",
    "JSONExceptionMiddleware",
    "domain_error_handler",
    "get_request_id",
]
