# -*- coding: utf-8 -*-
"""
backend/tests/modules/generations/test_generation_history.py

Historial propio: listado, detalle y borrado (sin reembolso).

Autor: Adlibify
Fecha: 2026-10-19
"""

from datetime import datetime, timedelta, timezone
from http import HTTPStatus

import pytest

from app.modules.generations.enums import GenerationStatus


@pytest.mark.asyncio
async def test_list_is_newest_first_and_scoped_to_user(
    async_client, auth_headers, make_profile, make_generation
):
    owner = await make_profile()
    other = await make_profile()
    now = datetime.now(timezone.utc)
    older = await make_generation(owner, created_at=now - timedelta(hours=2))
    newer = await make_generation(owner, created_at=now - timedelta(minutes=1))
    await make_generation(other)

    r = await async_client.get("/api/generations", headers=auth_headers(owner))

    assert r.status_code == HTTPStatus.OK
    assert [g["id"] for g in r.json()] == [str(newer), str(older)]


@pytest.mark.asyncio
async def test_get_other_users_generation_is_404(async_client, auth_headers, make_profile, make_generation):
    owner = await make_profile()
    intruder = await make_profile()
    generation_id = await make_generation(owner)

    r = await async_client.get(f"/api/generations/{generation_id}", headers=auth_headers(intruder))

    assert r.status_code == HTTPStatus.NOT_FOUND
    assert r.json()["error"] == "generation_not_found"


@pytest.mark.asyncio
async def test_delete_does_not_refund(
    async_client, auth_headers, make_profile, make_generation, read_generation, read_credits
):
    owner = await make_profile(credits=4)
    generation_id = await make_generation(owner, status=GenerationStatus.COMPLETED)

    r = await async_client.delete(f"/api/generations/{generation_id}", headers=auth_headers(owner))

    assert r.status_code == HTTPStatus.NO_CONTENT
    assert await read_generation(generation_id) is None
    assert await read_credits(owner) == 4


@pytest.mark.asyncio
async def test_delete_other_users_generation_is_404(
    async_client, auth_headers, make_profile, make_generation, read_generation
):
    owner = await make_profile()
    intruder = await make_profile()
    generation_id = await make_generation(owner)

    r = await async_client.delete(f"/api/generations/{generation_id}", headers=auth_headers(intruder))

    assert r.status_code == HTTPStatus.NOT_FOUND
    assert await read_generation(generation_id) is not None
