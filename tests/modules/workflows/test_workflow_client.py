# -*- coding: utf-8 -*-
"""
backend/tests/modules/workflows/test_workflow_client.py

Autor: Adlibify
Fecha: 2026-10-19
"""

import httpx
import pytest

from app.modules.workflows.client import (
    WorkflowDispatchError,
    WorkflowNotConfiguredError,
    WorkflowWebhookClient,
)


def _raise_connect_error(request):
    raise httpx.ConnectError("connection refused", request=request)


def test_url_for_unconfigured_category_raises():
    client = WorkflowWebhookClient({"ugc-product": None})

    with pytest.raises(WorkflowNotConfiguredError):
        client.url_for("ugc-product")


def test_is_known_url_ignores_empty_entries():
    client = WorkflowWebhookClient({"ugc-product": "https://n8n.test/a", "software-ui": None})

    assert client.is_known_url("https://n8n.test/a")
    assert not client.is_known_url("https://n8n.test/b")
    assert not client.is_known_url("")


@pytest.mark.asyncio
async def test_send_network_error_raises_dispatch_error():
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(_raise_connect_error))
    client = WorkflowWebhookClient({"ugc-product": "https://n8n.test/a"}, http_client=http_client)

    with pytest.raises(WorkflowDispatchError):
        await client.send("https://n8n.test/a", {"x": 1})


@pytest.mark.asyncio
async def test_send_empty_body_returns_empty_dict():
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(204)))
    client = WorkflowWebhookClient({"ugc-product": "https://n8n.test/a"}, http_client=http_client)

    assert await client.send("https://n8n.test/a", {}) == {}
