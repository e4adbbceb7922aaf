# -*- coding: utf-8 -*-
"""
backend/tests/shared/test_errors.py

Forma JSON de los errores de dominio y del middleware de excepciones.

Autor: Adlibify
Fecha: 2026-10-19
"""

from http import HTTPStatus

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from app.shared.errors import DomainError, UpstreamError
from app.shared.middleware import JSONExceptionMiddleware, domain_error_handler


def test_to_dict_uses_camel_case_extras():
    err = UpstreamError("boom", upstream_status=503)

    assert err.status_code == 502
    assert err.to_dict() == {
        "success": False,
        "error": "upstream_error",
        "message": "boom",
        "upstreamStatus": 503,
    }


def test_default_message():
    assert DomainError().message == "Request could not be processed"


def _build_app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(JSONExceptionMiddleware)
    app.add_exception_handler(DomainError, domain_error_handler)

    @app.get("/domain")
    async def domain():
        raise UpstreamError("provider down")

    @app.get("/crash")
    async def crash():
        raise RuntimeError("unexpected")

    return app


@pytest.mark.asyncio
async def test_domain_error_handler_and_unhandled_exceptions():
    transport = ASGITransport(app=_build_app())
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        domain = await client.get("/domain")
        crash = await client.get("/crash", headers={"x-request-id": "req-123"})

    assert domain.status_code == HTTPStatus.BAD_GATEWAY
    assert domain.json()["error"] == "upstream_error"

    assert crash.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
    assert crash.json() == {
        "success": False,
        "error": "internal_server_error",
        "message": "Internal server error",
        "request_id": "req-123",
    }
    assert crash.headers["X-Request-ID"] == "req-123"
