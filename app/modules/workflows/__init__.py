# -*- coding: utf-8 -*-
"""
backend/app/modules/workflows/__init__.py

Despacho de requests al motor externo de workflows (n8n).
"""

from .client import (
    WorkflowDispatchError,
    WorkflowNotConfiguredError,
    WorkflowWebhookClient,
    get_workflow_client,
)

__all__ = [
    "WorkflowDispatchError",
    "WorkflowNotConfiguredError",
    "WorkflowWebhookClient",
    "get_workflow_client",
]
