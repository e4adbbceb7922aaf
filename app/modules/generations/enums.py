# -*- coding: utf-8 -*-
"""
backend/app/modules/generations/enums.py

Enums de generaciones de video.

Autor: Adlibify
Fecha: 2026-10-19
"""

from enum import Enum


class GenerationStatus(str, Enum):
    """
    Estado de una generación.

    Solo avanza: processing → completed | failed.
    """
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class WorkflowType(str, Enum):
    """Workflow de n8n que procesa la generación."""
    UGC_PRODUCT = "ugc-product"
    SERVICE_BUSINESS = "service-business"
    SOFTWARE_UI_LOGO = "software-ui-logo"


class WorkflowCategory(str, Enum):
    """Pestaña del estudio (template_category)."""
    UGC_PRODUCT = "ugc-product"
    SERVICE_BUSINESS = "service-business"
    SOFTWARE_UI = "software-ui"

    @property
    def workflow_type(self) -> WorkflowType:
        return _CATEGORY_TO_WORKFLOW[self]


_CATEGORY_TO_WORKFLOW = {
    WorkflowCategory.UGC_PRODUCT: WorkflowType.UGC_PRODUCT,
    WorkflowCategory.SERVICE_BUSINESS: WorkflowType.SERVICE_BUSINESS,
    WorkflowCategory.SOFTWARE_UI: WorkflowType.SOFTWARE_UI_LOGO,
}


__all__ = ["GenerationStatus", "WorkflowType", "WorkflowCategory"]
