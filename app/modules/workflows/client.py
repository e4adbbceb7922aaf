# -*- coding: utf-8 -*-
"""
backend/app/modules/workflows/client.py

Cliente de webhooks del motor de workflows (n8n).

Cada categoría de generación tiene su propio webhook configurado por
variable de entorno; el cliente solo hace POST JSON y devuelve el cuerpo
de respuesta del upstream.

Autor: Adlibify
Fecha: 2026-10-19
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

import httpx

from app.shared.config import settings
from app.shared.errors import DomainError, UpstreamError

logger = logging.getLogger(__name__)


class WorkflowDispatchError(UpstreamError):
    error_code = "workflow_dispatch_failed"
    default_message = "Workflow webhook call failed"


class WorkflowNotConfiguredError(DomainError):
    status_code = 503
    error_code = "workflow_not_configured"
    default_message = "No webhook configured for this workflow"


class WorkflowWebhookClient:
    """
    POST JSON a webhooks de n8n.

    `http_client` permite inyectar un httpx.AsyncClient (tests con
    httpx.MockTransport).
    """

    def __init__(
        self,
        webhook_urls: Optional[Mapping[str, Optional[str]]] = None,
        *,
        timeout: float = 30.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.webhook_urls: Dict[str, Optional[str]] = dict(webhook_urls or {})
        self._timeout = timeout
        self._client = http_client

    def url_for(self, category: str) -> str:
        url = self.webhook_urls.get(category)
        if not url:
            raise WorkflowNotConfiguredError(f"No webhook configured for workflow '{category}'")
        return url

    def is_known_url(self, url: str) -> bool:
        return bool(url) and url in {u for u in self.webhook_urls.values() if u}

    async def _post(self, url: str, payload: Mapping[str, Any]) -> httpx.Response:
        if self._client is not None:
            return await self._client.post(url, json=payload)
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            return await client.post(url, json=payload)

    async def send(self, url: str, payload: Mapping[str, Any]) -> Any:
        """
        Envía el payload y devuelve el JSON de respuesta.

        Un cuerpo no-JSON se devuelve como {"raw": <texto>}.

        Raises:
            WorkflowDispatchError: error de red o respuesta no 2xx.
        """
        try:
            response = await self._post(url, payload)
        except httpx.RequestError as e:
            logger.error("Workflow webhook unreachable url=%s error=%s", url, e)
            raise WorkflowDispatchError(f"Workflow webhook unreachable: {e}") from e

        if response.is_error:
            logger.error(
                "Workflow webhook error url=%s status=%s body=%s",
                url, response.status_code, response.text[:300],
            )
            raise WorkflowDispatchError(
                f"Webhook request failed: {response.status_code}",
                upstream_status=response.status_code,
            )

        logger.info("Workflow webhook delivered url=%s status=%s", url, response.status_code)
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError:
            return {"raw": response.text}


def get_workflow_client() -> WorkflowWebhookClient:
    """Dependencia FastAPI: cliente con los webhooks configurados."""
    return WorkflowWebhookClient(
        settings.workflow_webhook_urls(),
        timeout=settings.workflow_timeout_sec,
    )


__all__ = [
    "WorkflowDispatchError",
    "WorkflowNotConfiguredError",
    "WorkflowWebhookClient",
    "get_workflow_client",
]
