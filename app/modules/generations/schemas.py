# -*- coding: utf-8 -*-
"""
backend/app/modules/generations/schemas.py

Esquemas Pydantic del módulo de generaciones (JSON en camelCase).

Autor: Adlibify
Fecha: 2026-10-19
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from app.shared.utils.base_models import ApiModel, Field
from .enums import GenerationStatus, WorkflowCategory, WorkflowType


class GenerationCreateRequest(ApiModel):
    """
    Formulario del estudio. Los campos requeridos dependen de la categoría:
    - ugc-product: productName, websiteUrl
    - service-business: businessWebsiteUrl
    - software-ui: companyName
    """

    category: WorkflowCategory

    product_name: Optional[str] = Field(default=None, max_length=200)
    website_url: Optional[str] = Field(default=None, max_length=2048)
    product_image_base64: Optional[str] = None

    business_website_url: Optional[str] = Field(default=None, max_length=2048)

    company_name: Optional[str] = Field(default=None, max_length=200)
    logo_image: Optional[str] = None
    ui_screenshot: Optional[str] = None


class GenerationResponse(ApiModel):
    id: UUID
    user_id: UUID
    title: str
    description: Optional[str] = None
    template_id: str
    template_category: WorkflowCategory
    workflow_type: WorkflowType
    status: GenerationStatus
    credits_used: int
    video_url: Optional[str] = None
    form_data: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime
    updated_at: datetime


class GenerationDispatchResponse(ApiModel):
    success: bool = True
    generation: GenerationResponse
    dispatched: bool
    message: str
    dispatch_error: Optional[str] = None


class StoreVideoResponse(ApiModel):
    success: bool = True
    video_url: str
    message: str = "Video stored successfully"


class ReaperResponse(ApiModel):
    success: bool = True
    message: str
    found: int
    updated: int


__all__ = [
    "GenerationCreateRequest",
    "GenerationResponse",
    "GenerationDispatchResponse",
    "StoreVideoResponse",
    "ReaperResponse",
]
