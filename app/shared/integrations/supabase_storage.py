# -*- coding: utf-8 -*-
"""
backend/app/shared/integrations/supabase_storage.py

Cliente HTTP para Supabase Storage usando httpx directamente.

Solo cubre lo que necesita la ingesta de videos:
- upload_bytes: POST /storage/v1/object/{bucket}/{path}
- get_public_url: URL pública del objeto (bucket público)

Autor: Adlibify
Fecha: 2026-10-19
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from app.shared.config import settings

logger = logging.getLogger(__name__)


class StorageUploadError(RuntimeError):
    """Falla al escribir un objeto en Storage (HTTP o conexión)."""

    error_code = "storage_upload_failed"

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class SupabaseStorageClient:
    """
    Cliente de Supabase Storage autenticado con la service-role key.

    `http_client` permite inyectar un httpx.AsyncClient (tests con
    httpx.MockTransport); si no se pasa, se abre uno por operación.
    """

    def __init__(
        self,
        base_url: str,
        service_role_key: str,
        *,
        timeout: float = 60.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        if not base_url or not service_role_key:
            raise RuntimeError("Faltan SUPABASE_URL / SUPABASE_SERVICE_ROLE_KEY para Storage")
        self.base_url = base_url.rstrip("/")
        self._auth_headers = {
            "Authorization": f"Bearer {service_role_key}",
            "apikey": service_role_key,
        }
        self._timeout = timeout
        self._client = http_client

    async def _post(self, url: str, *, headers: Dict[str, str], content: bytes) -> httpx.Response:
        if self._client is not None:
            return await self._client.post(url, headers=headers, content=content)
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            return await client.post(url, headers=headers, content=content)

    async def upload_bytes(
        self,
        bucket: str,
        path: str,
        data: bytes,
        content_type: str = "application/octet-stream",
        upsert: bool = False,
    ) -> Dict[str, Any]:
        """
        Sube un objeto a Storage.

        Raises:
            StorageUploadError: respuesta no 2xx (incluye 409 si ya existe
                y upsert=False) o error de conexión.
        """
        url = f"{self.base_url}/storage/v1/object/{bucket}/{path}"
        headers = {
            **self._auth_headers,
            "Content-Type": content_type,
            "x-upsert": "true" if upsert else "false",
        }

        try:
            response = await self._post(url, headers=headers, content=data)
        except httpx.RequestError as e:
            logger.error("Error de conexión al subir %s/%s: %s", bucket, path, e)
            raise StorageUploadError(f"Error de conexión con Storage: {e}") from e

        if response.status_code not in (200, 201):
            logger.error(
                "Error al subir %s/%s: %s - %s",
                bucket, path, response.status_code, response.text[:300],
            )
            raise StorageUploadError(
                f"Storage respondió {response.status_code}",
                status_code=response.status_code,
            )

        logger.info("Objeto subido: %s/%s (%d bytes)", bucket, path, len(data))
        # el objeto ya quedó escrito; un cuerpo no-JSON no es un error
        try:
            return response.json() if response.content else {}
        except ValueError:
            return {"raw": response.text}

    def get_public_url(self, bucket: str, path: str) -> str:
        return f"{self.base_url}/storage/v1/object/public/{bucket}/{path}"


def get_storage_client() -> SupabaseStorageClient:
    """Construye el cliente desde settings (dependencia FastAPI)."""
    key = settings.supabase_service_role_key
    return SupabaseStorageClient(
        base_url=settings.supabase_public_base() or "",
        service_role_key=key.get_secret_value() if key else "",
        timeout=settings.storage_timeout_sec,
    )


__all__ = ["StorageUploadError", "SupabaseStorageClient", "get_storage_client"]

# Fin del archivo backend/app/shared/integrations/supabase_storage.py
