# -*- coding: utf-8 -*-
"""
backend/app/modules/workflows/routes.py

Proxy same-origin hacia los webhooks de n8n.

POST /workflows/proxy  {webhookUrl, payload}
- 400 si falta alguno de los dos campos
- 403 si la URL no es uno de los webhooks configurados (no es un relay abierto)
- 502 {error} si el upstream falla; si no, devuelve el JSON del upstream

CORS abierto a cualquier origen en esta ruta (ver main._configure_cors).

Autor: Adlibify
Fecha: 2026-10-19
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from app.shared.errors import DomainError, ValidationError
from .client import WorkflowWebhookClient, get_workflow_client
from .schemas import WorkflowProxyRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/workflows", tags=["workflows"])

PROXY_PATH = "/workflows/proxy"


class WebhookNotAllowedError(DomainError):
    status_code = 403
    error_code = "webhook_not_allowed"
    default_message = "webhookUrl is not a configured workflow webhook"


@router.post("/proxy")
async def proxy_webhook(
    body: WorkflowProxyRequest,
    client: WorkflowWebhookClient = Depends(get_workflow_client),
):
    if not body.webhook_url or body.payload is None:
        raise ValidationError("Missing webhookUrl or payload")

    if not client.is_known_url(body.webhook_url):
        logger.warning("Rejected proxy call to unknown webhook url=%s", body.webhook_url)
        raise WebhookNotAllowedError()

    return await client.send(body.webhook_url, body.payload)


__all__ = ["router", "PROXY_PATH"]
