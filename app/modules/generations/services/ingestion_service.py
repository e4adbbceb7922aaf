# -*- coding: utf-8 -*-
"""
backend/app/modules/generations/services/ingestion_service.py

Ingesta del video terminado (callback del motor de workflows).

Flujo:
1. Verifica que la generación exista, pertenezca al usuario y siga en
   'processing' (evita subir objetos que nunca se van a referenciar).
2. Obtiene los bytes (upload directo o descarga desde videoUrl).
3. Sube a Storage. Si falla, no se toca ninguna fila.
4. En UNA transacción: processing → completed (video_url, credits_used=1)
   y débito condicional de 1 crédito. O se aplican ambos o ninguno.

Si entre el paso 1 y el 4 el reaper marcó la fila como failed, el
compare-and-swap del paso 4 no afecta filas y se responde 409; el objeto
subido queda huérfano en Storage.

Autor: Adlibify
Fecha: 2026-10-19
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

import httpx
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.profiles.repositories import ProfileRepository
from app.observability.business_metrics import CREDITS_DEBITED, VIDEO_INGESTIONS
from app.shared.integrations.supabase_storage import StorageUploadError, SupabaseStorageClient
from ..enums import GenerationStatus
from ..errors import (
    GenerationNotFoundError,
    GenerationStateConflictError,
    MissingFieldsError,
    VideoFetchError,
    VideoStorageError,
)
from ..repositories import GenerationRepository

logger = logging.getLogger(__name__)

VIDEO_CONTENT_TYPE = "video/mp4"
DEFAULT_VIDEO_BUCKET = "generated-videos"


@dataclass
class IngestionResult:
    generation_id: UUID
    video_url: str
    credit_debited: bool


def build_object_name(generation_id: UUID) -> str:
    return f"{generation_id}-{int(time.time() * 1000)}.mp4"


class VideoIngestionService:
    def __init__(
        self,
        storage: SupabaseStorageClient,
        *,
        bucket: str = DEFAULT_VIDEO_BUCKET,
        fetch_timeout: float = 120.0,
        http_client: Optional[httpx.AsyncClient] = None,
        generation_repo: Optional[GenerationRepository] = None,
        profile_repo: Optional[ProfileRepository] = None,
    ):
        self.storage = storage
        self.bucket = bucket
        self.fetch_timeout = fetch_timeout
        self._http_client = http_client
        self.generation_repo = generation_repo or GenerationRepository()
        self.profile_repo = profile_repo or ProfileRepository()

    async def fetch_remote_video(self, url: str) -> bytes:
        """Descarga el video desde la URL entregada por el workflow."""
        try:
            if self._http_client is not None:
                response = await self._http_client.get(url, follow_redirects=True)
            else:
                async with httpx.AsyncClient(timeout=self.fetch_timeout, follow_redirects=True) as client:
                    response = await client.get(url)
        except httpx.RequestError as e:
            logger.error("Video download failed url=%s error=%s", url, e)
            raise VideoFetchError(f"Failed to fetch video: {e}") from e

        if response.is_error:
            logger.error("Video download failed url=%s status=%s", url, response.status_code)
            raise VideoFetchError(f"Failed to fetch video: {response.status_code}")
        return response.content

    async def ingest(
        self,
        session: AsyncSession,
        *,
        user_id: UUID,
        generation_id: UUID,
        video_bytes: Optional[bytes] = None,
        video_url: Optional[str] = None,
    ) -> IngestionResult:
        if video_bytes is None and not video_url:
            raise MissingFieldsError("Missing required fields: videoFile or videoUrl")

        generation = await self.generation_repo.get_for_user(session, generation_id, user_id)
        if generation is None:
            raise GenerationNotFoundError()
        if generation.status is not GenerationStatus.PROCESSING:
            raise GenerationStateConflictError(
                f"Generation is already {generation.status.value}",
                status=generation.status.value,
            )
        # cerrar la transacción de lectura antes de I/O largo
        await session.rollback()

        if video_bytes is None:
            video_bytes = await self.fetch_remote_video(video_url)

        object_name = build_object_name(generation_id)
        try:
            await self.storage.upload_bytes(
                self.bucket,
                object_name,
                video_bytes,
                content_type=VIDEO_CONTENT_TYPE,
                upsert=False,
            )
        except StorageUploadError as e:
            VIDEO_INGESTIONS.labels("storage_failed").inc()
            raise VideoStorageError(f"Failed to upload video: {e}") from e

        public_url = self.storage.get_public_url(self.bucket, object_name)

        try:
            completed = await self.generation_repo.complete(session, generation_id, user_id, public_url)
            if not completed:
                await session.rollback()
                VIDEO_INGESTIONS.labels("conflict").inc()
                logger.warning(
                    "Generation left processing before ingestion finished: id=%s orphan=%s/%s",
                    generation_id, self.bucket, object_name,
                )
                raise GenerationStateConflictError()

            debited = await self.profile_repo.debit_one_credit(session, user_id)
            await session.commit()
        except GenerationStateConflictError:
            raise
        except Exception:
            await session.rollback()
            VIDEO_INGESTIONS.labels("db_failed").inc()
            logger.exception(
                "Ingestion rolled back after upload: id=%s orphan=%s/%s",
                generation_id, self.bucket, object_name,
            )
            raise

        if debited:
            CREDITS_DEBITED.inc()
        else:
            logger.warning("Generation completed without credit to debit: id=%s user=%s", generation_id, user_id)
        VIDEO_INGESTIONS.labels("completed").inc()
        logger.info(
            "Video stored: generation=%s user=%s url=%s debited=%s",
            generation_id, user_id, public_url, debited,
        )
        return IngestionResult(generation_id=generation_id, video_url=public_url, credit_debited=debited)


__all__ = [
    "VideoIngestionService",
    "IngestionResult",
    "build_object_name",
    "VIDEO_CONTENT_TYPE",
    "DEFAULT_VIDEO_BUCKET",
]
