# -*- coding: utf-8 -*-
"""
backend/app/modules/generations/models.py

Modelo ORM del ledger de generaciones.

Tabla: public.generations

Columnas DB:
- id: UUID PRIMARY KEY
- user_id: UUID NOT NULL → profiles.id (ON DELETE CASCADE)
- title, description
- template_id: TEXT NOT NULL DEFAULT 'default'
- template_category: TEXT ('ugc-product' | 'service-business' | 'software-ui')
- workflow_type: TEXT ('ugc-product' | 'service-business' | 'software-ui-logo')
- status: TEXT ('processing' | 'completed' | 'failed')
- credits_used: INTEGER NOT NULL DEFAULT 0
- video_url: TEXT NULL
- form_data: JSON (campos capturados en el estudio)
- created_at / updated_at: TIMESTAMPTZ

Índices:
- (user_id, created_at) para el historial
- (status, created_at) para el reaper

Autor: Adlibify
Fecha: 2026-10-19
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Optional

from sqlalchemy import JSON, DateTime, ForeignKey, Index, Integer, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from app.modules.profiles.models import utcnow
from app.shared.database.base import Base, as_str_enum
from .enums import GenerationStatus, WorkflowCategory, WorkflowType


class Generation(Base):
    __tablename__ = "generations"
    __table_args__ = (
        Index("ix_generations_user_id_created_at", "user_id", "created_at"),
        Index("ix_generations_status_created_at", "status", "created_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
    )

    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    template_id: Mapped[str] = mapped_column(String(64), nullable=False, default="default")
    template_category: Mapped[WorkflowCategory] = mapped_column(
        as_str_enum(WorkflowCategory, name="template_category"),
        nullable=False,
    )
    workflow_type: Mapped[WorkflowType] = mapped_column(
        as_str_enum(WorkflowType, name="workflow_type"),
        nullable=False,
    )

    status: Mapped[GenerationStatus] = mapped_column(
        as_str_enum(GenerationStatus, name="generation_status"),
        nullable=False,
        default=GenerationStatus.PROCESSING,
    )
    credits_used: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    video_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    form_data: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
    )

    def __repr__(self) -> str:
        return f"<Generation id={self.id} user={self.user_id} status={self.status}>"


__all__ = ["Generation"]
