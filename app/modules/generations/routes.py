# -*- coding: utf-8 -*-
"""
backend/app/modules/generations/routes.py

Endpoints de generaciones de video.

Usuario (JWT):
- POST   /generations          → valida, exige crédito, crea fila y llama al webhook
- GET    /generations          → historial propio (más reciente primero)
- GET    /generations/{id}     → detalle propio
- DELETE /generations/{id}     → borra del historial (no reembolsa créditos)

Servicio (APP_SERVICE_TOKEN):
- POST   /generations/store-video → callback del workflow con el video terminado
  (multipart userId/generationId/videoFile o JSON userId/generationId/videoUrl)

Autor: Adlibify
Fecha: 2026-10-19
"""

from __future__ import annotations

import logging
from typing import Any, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.datastructures import UploadFile

from app.modules.auth.dependencies import get_current_user_id
from app.modules.workflows.client import WorkflowWebhookClient, get_workflow_client
from app.shared.config import settings
from app.shared.database.database import get_async_session
from app.shared.errors import DomainError, ValidationError
from app.shared.integrations.supabase_storage import get_storage_client
from app.shared.internal_auth import InternalServiceAuth
from .errors import GenerationNotFoundError, MissingFieldsError
from .repositories import GenerationRepository
from .schemas import (
    GenerationCreateRequest,
    GenerationDispatchResponse,
    GenerationResponse,
    StoreVideoResponse,
)
from .services import GenerationDispatchService, VideoIngestionService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/generations", tags=["generations"])


class StorageNotConfiguredError(DomainError):
    status_code = 503
    error_code = "storage_not_configured"
    default_message = "Video storage is not configured"


# ── Dependencias
def get_generation_repository() -> GenerationRepository:
    return GenerationRepository()


def get_dispatch_service(
    workflow_client: WorkflowWebhookClient = Depends(get_workflow_client),
) -> GenerationDispatchService:
    return GenerationDispatchService(workflow_client)


def get_ingestion_service() -> VideoIngestionService:
    try:
        storage = get_storage_client()
    except RuntimeError as e:
        logger.error("Storage client unavailable: %s", e)
        raise StorageNotConfiguredError() from e
    return VideoIngestionService(
        storage,
        bucket=settings.supabase_video_bucket,
        fetch_timeout=settings.video_fetch_timeout_sec,
    )


def _parse_uuid(value: Any, field: str) -> UUID:
    try:
        return UUID(str(value))
    except ValueError as e:
        raise ValidationError(f"Invalid {field}", field=field) from e


# ── Callback de ingesta (declarado antes de /{generation_id})
@router.post("/store-video", response_model=StoreVideoResponse)
async def store_video(
    request: Request,
    _auth: InternalServiceAuth,
    session: AsyncSession = Depends(get_async_session),
    service: VideoIngestionService = Depends(get_ingestion_service),
):
    content_type = request.headers.get("content-type", "")
    video_bytes: Optional[bytes] = None
    video_url: Optional[str] = None

    if content_type.startswith("multipart/form-data"):
        form = await request.form()
        raw_user_id = form.get("userId")
        raw_generation_id = form.get("generationId")
        video_file = form.get("videoFile")
        if isinstance(video_file, UploadFile):
            video_bytes = await video_file.read()
        video_url = form.get("videoUrl") if isinstance(form.get("videoUrl"), str) else None
    else:
        try:
            body = await request.json()
        except ValueError as e:
            raise ValidationError("Request body must be JSON or multipart/form-data") from e
        if not isinstance(body, dict):
            raise ValidationError("Request body must be a JSON object")
        raw_user_id = body.get("userId")
        raw_generation_id = body.get("generationId")
        video_url = body.get("videoUrl")

    if not raw_user_id or not raw_generation_id or (video_bytes is None and not video_url):
        raise MissingFieldsError(
            "Missing required fields: userId, generationId, and either videoFile or videoUrl"
        )

    result = await service.ingest(
        session,
        user_id=_parse_uuid(raw_user_id, "userId"),
        generation_id=_parse_uuid(raw_generation_id, "generationId"),
        video_bytes=video_bytes,
        video_url=video_url,
    )
    return StoreVideoResponse(video_url=result.video_url)


# ── Endpoints del usuario
@router.post("", response_model=GenerationDispatchResponse, status_code=status.HTTP_201_CREATED)
async def create_generation(
    body: GenerationCreateRequest,
    user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_async_session),
    service: GenerationDispatchService = Depends(get_dispatch_service),
):
    result = await service.submit(session, user_id, body)
    if result.dispatched:
        message = "Your video is being generated. This usually takes 2-5 minutes."
    else:
        message = "Your video was queued but the workflow could not be reached. It will be marked failed if it does not start."
    return GenerationDispatchResponse(
        generation=GenerationResponse.model_validate(result.generation),
        dispatched=result.dispatched,
        message=message,
        dispatch_error=result.error,
    )


@router.get("", response_model=list[GenerationResponse])
async def list_generations(
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_async_session),
    repo: GenerationRepository = Depends(get_generation_repository),
):
    return await repo.list_for_user(session, user_id, limit=limit, offset=offset)


@router.get("/{generation_id}", response_model=GenerationResponse)
async def get_generation(
    generation_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_async_session),
    repo: GenerationRepository = Depends(get_generation_repository),
):
    generation = await repo.get_for_user(session, generation_id, user_id)
    if generation is None:
        raise GenerationNotFoundError()
    return generation


@router.delete("/{generation_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_generation(
    generation_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_async_session),
    repo: GenerationRepository = Depends(get_generation_repository),
):
    deleted = await repo.delete_for_user(session, generation_id, user_id)
    if not deleted:
        raise GenerationNotFoundError()
    await session.commit()
    logger.info("Generation deleted: id=%s user=%s", generation_id, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = [
    "router",
    "get_dispatch_service",
    "get_ingestion_service",
    "get_generation_repository",
]
# Fin del archivo backend/app/modules/generations/routes.py
