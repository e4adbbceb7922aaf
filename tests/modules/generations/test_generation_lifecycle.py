# -*- coding: utf-8 -*-
"""
backend/tests/modules/generations/test_generation_lifecycle.py

Recorrido completo: alta con crédito de bienvenida → generación →
callback con el video → saldo en 0 y generación completada.

Autor: Adlibify
Fecha: 2026-10-19
"""

import uuid
from http import HTTPStatus

import pytest

from app.modules.generations.enums import GenerationStatus

VIDEO_SOURCE_URL = "https://videos.test/render/final.mp4"


@pytest.mark.asyncio
async def test_signup_credit_pays_for_one_video(
    async_client, auth_headers, service_headers, webhook_http, read_generation, read_credits
):
    user_id = uuid.uuid4()
    headers = auth_headers(user_id)

    signup = await async_client.post("/api/profiles", json={"email": "ana@example.com"}, headers=headers)
    assert signup.status_code == HTTPStatus.CREATED
    assert signup.json()["credits"] == 1

    created = await async_client.post(
        "/api/generations",
        json={
            "category": "ugc-product",
            "productName": "Glow Serum",
            "websiteUrl": "https://shop.example.com/serum",
        },
        headers=headers,
    )
    assert created.status_code == HTTPStatus.CREATED
    assert created.json()["dispatched"] is True
    generation_id = created.json()["generation"]["id"]
    assert len(webhook_http.requests) == 1

    stored = await async_client.post(
        "/api/generations/store-video",
        json={"userId": str(user_id), "generationId": generation_id, "videoUrl": VIDEO_SOURCE_URL},
        headers=service_headers,
    )
    assert stored.status_code == HTTPStatus.OK

    me = await async_client.get("/api/profiles/me", headers=headers)
    assert me.json()["credits"] == 0
    assert await read_credits(user_id) == 0

    generation = await read_generation(uuid.UUID(generation_id))
    assert generation.status is GenerationStatus.COMPLETED
    assert generation.credits_used == 1
    assert generation.video_url == stored.json()["videoUrl"]

    # sin créditos, la siguiente generación queda bloqueada sin crear fila
    blocked = await async_client.post(
        "/api/generations",
        json={
            "category": "ugc-product",
            "productName": "Glow Serum",
            "websiteUrl": "https://shop.example.com/serum",
        },
        headers=headers,
    )
    assert blocked.status_code == HTTPStatus.PAYMENT_REQUIRED
    history = await async_client.get("/api/generations", headers=headers)
    assert len(history.json()) == 1
