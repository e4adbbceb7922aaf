# -*- coding: utf-8 -*-
"""
backend/app/modules/billing/models.py

Modelo ORM para la tabla processed_checkout_sessions.

Una fila por Checkout Session de Stripe ya acreditada. La restricción
UNIQUE sobre session_id es la que garantiza que una sesión se acredite
una sola vez, sin importar cuántas veces se llame a verify-payment o
cuántas veces Stripe reintente el webhook.

Autor: Adlibify
Fecha: 2026-10-19
"""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, UniqueConstraint, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from app.modules.profiles.models import utcnow
from app.shared.database.base import Base


class ProcessedCheckoutSession(Base):
    __tablename__ = "processed_checkout_sessions"
    __table_args__ = (
        UniqueConstraint("session_id", name="uq_processed_checkout_sessions_session_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    session_id: Mapped[str] = mapped_column(String(255), nullable=False)

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    price_id: Mapped[str] = mapped_column(String(255), nullable=False)
    credits: Mapped[int] = mapped_column(Integer, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return (
            f"<ProcessedCheckoutSession(session_id={self.session_id!r}, "
            f"user_id={self.user_id}, credits={self.credits})>"
        )


__all__ = ["ProcessedCheckoutSession"]
