# -*- coding: utf-8 -*-
"""
backend/app/modules/generations/services/dispatch_service.py

Alta de una generación y notificación al motor de workflows.

Orden de operaciones:
1. Validar campos requeridos de la categoría (nada se escribe si faltan).
2. Exigir saldo >= 1 (paywall; nada se escribe).
3. Insertar la fila en 'processing' y hacer commit, para que el callback
   de ingesta siempre encuentre la fila.
4. Enviar el payload al webhook de la categoría. Si falla, la fila queda
   en 'processing' y la recoge el reaper; no se revierte el insert.

Autor: Adlibify
Fecha: 2026-10-19
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.profiles.repositories import ProfileRepository
from app.modules.profiles.services import ProfileNotFoundError
from app.modules.workflows.client import (
    WorkflowDispatchError,
    WorkflowNotConfiguredError,
    WorkflowWebhookClient,
)
from app.observability.business_metrics import GENERATIONS_DISPATCHED
from ..enums import GenerationStatus, WorkflowCategory
from ..errors import InsufficientCreditsError, MissingFieldsError
from ..models import Generation
from ..repositories import GenerationRepository
from ..schemas import GenerationCreateRequest

logger = logging.getLogger(__name__)

# Campos obligatorios por categoría (nombre de atributo, nombre JSON)
REQUIRED_FIELDS: dict[WorkflowCategory, tuple[tuple[str, str], ...]] = {
    WorkflowCategory.UGC_PRODUCT: (("product_name", "productName"), ("website_url", "websiteUrl")),
    WorkflowCategory.SERVICE_BUSINESS: (("business_website_url", "businessWebsiteUrl"),),
    WorkflowCategory.SOFTWARE_UI: (("company_name", "companyName"),),
}


@dataclass
class DispatchResult:
    generation: Generation
    dispatched: bool
    error: Optional[str] = None
    upstream_response: Any = None


def validate_request(request: GenerationCreateRequest) -> None:
    """Lanza MissingFieldsError si falta algún campo de la categoría."""
    missing = [
        json_name
        for attr, json_name in REQUIRED_FIELDS[request.category]
        if not (getattr(request, attr) or "").strip()
    ]
    if missing:
        raise MissingFieldsError(
            f"Please fill in: {', '.join(missing)}",
            missing_fields=missing,
        )


def describe(request: GenerationCreateRequest) -> tuple[str, str]:
    """Título y descripción que se guardan en el historial."""
    if request.category is WorkflowCategory.UGC_PRODUCT:
        return request.product_name, f"Product: {request.product_name}"
    if request.category is WorkflowCategory.SOFTWARE_UI:
        return request.company_name, f"Company: {request.company_name}"
    return "Service Business Video", f"Business: {request.business_website_url}"


def build_payload(user_id: UUID, generation: Generation, request: GenerationCreateRequest) -> dict[str, Any]:
    """Payload JSON que espera cada workflow de n8n."""
    payload: dict[str, Any] = {
        "userId": str(user_id),
        "projectId": uuid.uuid4().hex[:9],
        "generationId": str(generation.id),
        "workflow": generation.workflow_type.value,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    if request.category is WorkflowCategory.UGC_PRODUCT:
        payload.update(
            description=request.product_name,
            website_url=request.website_url,
            image_base64=request.product_image_base64,
        )
    elif request.category is WorkflowCategory.SERVICE_BUSINESS:
        payload.update(businessWebsiteUrl=request.business_website_url)
    else:
        payload.update(
            companyName=request.company_name,
            logoImage=request.logo_image,
            uiScreenshot=request.ui_screenshot,
        )
    return payload


class GenerationDispatchService:
    def __init__(
        self,
        workflow_client: WorkflowWebhookClient,
        generation_repo: Optional[GenerationRepository] = None,
        profile_repo: Optional[ProfileRepository] = None,
    ):
        self.workflow_client = workflow_client
        self.generation_repo = generation_repo or GenerationRepository()
        self.profile_repo = profile_repo or ProfileRepository()

    async def submit(
        self,
        session: AsyncSession,
        user_id: UUID,
        request: GenerationCreateRequest,
    ) -> DispatchResult:
        validate_request(request)

        credits = await self.profile_repo.get_credits(session, user_id)
        if credits is None:
            raise ProfileNotFoundError()
        if credits < 1:
            logger.info("Generation blocked by paywall: user=%s credits=%d", user_id, credits)
            GENERATIONS_DISPATCHED.labels(request.category.value, "blocked").inc()
            raise InsufficientCreditsError()

        title, description = describe(request)
        generation = await self.generation_repo.create(
            session,
            user_id=user_id,
            title=title,
            description=description,
            template_id="default",
            template_category=request.category,
            workflow_type=request.category.workflow_type,
            status=GenerationStatus.PROCESSING,
            credits_used=0,
            form_data={
                "productName": request.product_name,
                "websiteUrl": request.website_url,
                "businessWebsiteUrl": request.business_website_url,
                "companyName": request.company_name,
            },
        )
        await session.commit()
        logger.info(
            "Generation created: id=%s user=%s workflow=%s",
            generation.id, user_id, generation.workflow_type.value,
        )

        payload = build_payload(user_id, generation, request)
        try:
            url = self.workflow_client.url_for(request.category.value)
            upstream = await self.workflow_client.send(url, payload)
        except (WorkflowDispatchError, WorkflowNotConfiguredError) as e:
            # la fila queda en processing; el reaper la marcará failed
            logger.warning(
                "Workflow notification failed: generation=%s error=%s",
                generation.id, e.message,
            )
            GENERATIONS_DISPATCHED.labels(request.category.value, "webhook_failed").inc()
            return DispatchResult(generation=generation, dispatched=False, error=e.message)

        GENERATIONS_DISPATCHED.labels(request.category.value, "dispatched").inc()
        return DispatchResult(generation=generation, dispatched=True, upstream_response=upstream)


__all__ = [
    "GenerationDispatchService",
    "DispatchResult",
    "REQUIRED_FIELDS",
    "validate_request",
    "build_payload",
]
