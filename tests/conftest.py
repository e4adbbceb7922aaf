# backend/tests/conftest.py
# -*- coding: utf-8 -*-
"""
Config global de tests para Adlibify.

- PYTHON_ENV=test antes de importar la app (SQLite en memoria, scheduler apagado).
- Un engine aiosqlite nuevo por test, con create_all.
- Colaboradores externos (n8n, Supabase Storage, descarga de videos) con
  httpx.MockTransport; Stripe con AsyncMock.
- Cliente httpx con ASGITransport + asgi-lifespan.
"""

import os

os.environ["PYTHON_ENV"] = "test"
os.environ.pop("CREDIT_PACKS_JSON", None)

import uuid
from collections.abc import AsyncIterator
from typing import Callable, Optional
from unittest.mock import AsyncMock

import httpx
import pytest
from asgi_lifespan import LifespanManager
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.modules.auth.security import create_access_token
from app.modules.billing.models import ProcessedCheckoutSession  # noqa: F401
from app.modules.billing.providers.stripe_provider import StripeProvider, get_stripe_provider
from app.modules.generations.enums import GenerationStatus, WorkflowCategory
from app.modules.generations.models import Generation
from app.modules.generations.routes import get_ingestion_service
from app.modules.generations.services import VideoIngestionService
from app.modules.profiles.models import Profile
from app.modules.workflows.client import WorkflowWebhookClient, get_workflow_client
from app.shared.config import get_settings
from app.shared.database import Base
from app.shared.database.database import build_engine, get_async_session
from app.shared.integrations.supabase_storage import SupabaseStorageClient

SERVICE_TOKEN = "test-service-token"
STORAGE_BASE = "https://storage.test"
VIDEO_SOURCE_URL = "https://videos.test/render/final.mp4"
VIDEO_BYTES = b"\x00\x00\x00\x18ftypmp42fake-video"


# -----------------------------------------------------------------------------
# HTTP externo simulado
# -----------------------------------------------------------------------------
class MockHttp:
    """
    Registra requests salientes y responde según `responder`.

    Por defecto: 200 JSON {"ok": true}. Los tests cambian `responder`
    para simular caídas o errores del upstream.
    """

    def __init__(self, responder: Optional[Callable[[httpx.Request], httpx.Response]] = None):
        self.requests: list[httpx.Request] = []
        self.responder = responder or (lambda request: httpx.Response(200, json={"ok": True}))

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


def _default_external_responder(request: httpx.Request) -> httpx.Response:
    if request.method == "GET" and request.url.host == "videos.test":
        return httpx.Response(200, content=VIDEO_BYTES, headers={"content-type": "video/mp4"})
    if request.method == "POST" and request.url.host == "storage.test":
        return httpx.Response(200, json={"Key": request.url.path})
    return httpx.Response(404)


# -----------------------------------------------------------------------------
# Base de datos
# -----------------------------------------------------------------------------
@pytest.fixture
async def engine():
    eng = build_engine("sqlite+aiosqlite:///:memory:")
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_maker(engine) -> async_sessionmaker:
    return async_sessionmaker(bind=engine, expire_on_commit=False, class_=AsyncSession, autoflush=False)


@pytest.fixture
async def db_session(session_maker) -> AsyncIterator[AsyncSession]:
    async with session_maker() as session:
        yield session


@pytest.fixture
def make_profile(session_maker):
    """Crea un perfil con el saldo indicado y devuelve su id."""

    async def _make(credits: int = 1, user_id: Optional[uuid.UUID] = None) -> uuid.UUID:
        user_id = user_id or uuid.uuid4()
        async with session_maker() as session:
            session.add(Profile(id=user_id, email=f"{user_id.hex[:8]}@example.com", credits=credits))
            await session.commit()
        return user_id

    return _make


@pytest.fixture
def make_generation(session_maker):
    """Inserta una generación en el estado indicado."""

    async def _make(
        user_id: uuid.UUID,
        status: GenerationStatus = GenerationStatus.PROCESSING,
        category: WorkflowCategory = WorkflowCategory.UGC_PRODUCT,
        created_at=None,
    ) -> uuid.UUID:
        async with session_maker() as session:
            generation = Generation(
                user_id=user_id,
                title="Test product",
                description="Product: Test product",
                template_category=category,
                workflow_type=category.workflow_type,
                status=status,
                form_data={},
            )
            if created_at is not None:
                generation.created_at = created_at
            session.add(generation)
            await session.commit()
            return generation.id

    return _make


@pytest.fixture
def read_credits(session_maker):
    async def _read(user_id: uuid.UUID) -> Optional[int]:
        async with session_maker() as session:
            profile = await session.get(Profile, user_id)
            return None if profile is None else profile.credits

    return _read


@pytest.fixture
def read_generation(session_maker):
    async def _read(generation_id: uuid.UUID) -> Optional[Generation]:
        async with session_maker() as session:
            return await session.get(Generation, generation_id)

    return _read


# -----------------------------------------------------------------------------
# Colaboradores externos
# -----------------------------------------------------------------------------
@pytest.fixture
def webhook_http() -> MockHttp:
    return MockHttp()


@pytest.fixture
def external_http() -> MockHttp:
    """Storage (POST storage.test) y origen de videos (GET videos.test)."""
    return MockHttp(_default_external_responder)


@pytest.fixture
def workflow_client(webhook_http) -> WorkflowWebhookClient:
    return WorkflowWebhookClient(
        get_settings().workflow_webhook_urls(),
        http_client=webhook_http.client(),
    )


@pytest.fixture
def storage_client(external_http) -> SupabaseStorageClient:
    return SupabaseStorageClient(STORAGE_BASE, "service-role-test", http_client=external_http.client())


@pytest.fixture
def ingestion_service(storage_client, external_http) -> VideoIngestionService:
    return VideoIngestionService(
        storage_client,
        bucket="generated-videos",
        http_client=external_http.client(),
    )


@pytest.fixture
def stripe_provider() -> AsyncMock:
    return AsyncMock(spec=StripeProvider)


# -----------------------------------------------------------------------------
# App FastAPI y cliente httpx (con ciclo de vida)
# -----------------------------------------------------------------------------
@pytest.fixture
def app(session_maker, workflow_client, ingestion_service, stripe_provider):
    from app.main import app as fastapi_app

    async def _session_override() -> AsyncIterator[AsyncSession]:
        async with session_maker() as session:
            yield session

    fastapi_app.dependency_overrides[get_async_session] = _session_override
    fastapi_app.dependency_overrides[get_workflow_client] = lambda: workflow_client
    fastapi_app.dependency_overrides[get_ingestion_service] = lambda: ingestion_service
    fastapi_app.dependency_overrides[get_stripe_provider] = lambda: stripe_provider
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
async def async_client(app) -> AsyncIterator[AsyncClient]:
    async with LifespanManager(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://testserver") as client:
            yield client


@pytest.fixture
def auth_headers():
    def _headers(user_id: uuid.UUID) -> dict:
        return {"Authorization": f"Bearer {create_access_token(user_id)}"}

    return _headers


@pytest.fixture
def service_headers() -> dict:
    return {"Authorization": f"Bearer {SERVICE_TOKEN}"}
