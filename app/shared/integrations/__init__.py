# -*- coding: utf-8 -*-
"""
backend/app/shared/integrations/__init__.py

Clientes HTTP hacia servicios externos compartidos.

Autor: Adlibify
Fecha: 2026-10-19
"""

from .supabase_storage import (
    StorageUploadError,
    SupabaseStorageClient,
    get_storage_client,
)

__all__ = [
    "StorageUploadError",
    "SupabaseStorageClient",
    "get_storage_client",
]
