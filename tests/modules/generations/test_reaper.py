# -*- coding: utf-8 -*-
"""
backend/tests/modules/generations/test_reaper.py

Reaper de generaciones colgadas: job y endpoint interno.

Autor: Adlibify
Fecha: 2026-10-19
"""

from datetime import datetime, timedelta, timezone
from http import HTTPStatus

import pytest
from sqlalchemy.exc import SQLAlchemyError

from app.modules.generations.enums import GenerationStatus
from app.modules.generations.jobs import (
    GENERATION_REAPER_JOB_ID,
    fail_stuck_generations,
    register_generation_reaper_job,
)
from app.modules.generations.repositories import GenerationRepository
from app.shared.scheduler import get_scheduler


def _minutes_ago(minutes: int) -> datetime:
    return datetime.now(timezone.utc) - timedelta(minutes=minutes)


@pytest.mark.asyncio
async def test_only_old_processing_rows_are_failed(db_session, make_profile, make_generation, read_generation):
    user_id = await make_profile()
    stuck = await make_generation(user_id, created_at=_minutes_ago(16))
    fresh = await make_generation(user_id, created_at=_minutes_ago(14))
    old_completed = await make_generation(user_id, status=GenerationStatus.COMPLETED, created_at=_minutes_ago(60))

    result = await fail_stuck_generations(timeout_minutes=15, session=db_session)

    assert (result.found, result.updated) == (1, 1)
    assert (await read_generation(stuck)).status is GenerationStatus.FAILED
    assert (await read_generation(fresh)).status is GenerationStatus.PROCESSING
    assert (await read_generation(old_completed)).status is GenerationStatus.COMPLETED


@pytest.mark.asyncio
async def test_second_run_is_a_no_op(db_session, make_profile, make_generation, read_generation):
    user_id = await make_profile()
    stuck = await make_generation(user_id, created_at=_minutes_ago(20))

    first = await fail_stuck_generations(timeout_minutes=15, session=db_session)
    second = await fail_stuck_generations(timeout_minutes=15, session=db_session)

    assert (first.found, first.updated) == (1, 1)
    assert (second.found, second.updated) == (0, 0)
    assert (await read_generation(stuck)).status is GenerationStatus.FAILED


class _BrokenRowRepository(GenerationRepository):
    def __init__(self, broken_id):
        super().__init__()
        self.broken_id = broken_id

    async def mark_failed(self, session, generation_id):
        if generation_id == self.broken_id:
            raise SQLAlchemyError("row locked")
        return await super().mark_failed(session, generation_id)


@pytest.mark.asyncio
async def test_row_error_does_not_block_other_rows(db_session, make_profile, make_generation, read_generation):
    user_id = await make_profile()
    first = await make_generation(user_id, created_at=_minutes_ago(30))
    broken = await make_generation(user_id, created_at=_minutes_ago(25))
    last = await make_generation(user_id, created_at=_minutes_ago(20))

    result = await fail_stuck_generations(
        timeout_minutes=15,
        session=db_session,
        generation_repo=_BrokenRowRepository(broken),
    )

    assert (result.found, result.updated) == (3, 2)
    assert (await read_generation(first)).status is GenerationStatus.FAILED
    assert (await read_generation(broken)).status is GenerationStatus.PROCESSING
    assert (await read_generation(last)).status is GenerationStatus.FAILED


@pytest.mark.asyncio
async def test_reaper_does_not_refund_credits(db_session, make_profile, make_generation, read_credits):
    user_id = await make_profile(credits=3)
    await make_generation(user_id, created_at=_minutes_ago(30))

    await fail_stuck_generations(timeout_minutes=15, session=db_session)

    assert await read_credits(user_id) == 3


@pytest.mark.asyncio
async def test_reaper_with_nothing_stuck(db_session):
    result = await fail_stuck_generations(timeout_minutes=15, session=db_session)

    assert (result.found, result.updated) == (0, 0)
    assert result.message == "Processed 0 stuck videos, updated 0 to failed status"


@pytest.mark.asyncio
async def test_reap_stale_endpoint(async_client, service_headers, make_profile, make_generation, read_generation):
    user_id = await make_profile()
    stuck = await make_generation(user_id, created_at=_minutes_ago(20))

    r = await async_client.post("/api/internal/generations/reap-stale", headers=service_headers)

    assert r.status_code == HTTPStatus.OK
    data = r.json()
    assert data == {
        "success": True,
        "message": "Processed 1 stuck videos, updated 1 to failed status",
        "found": 1,
        "updated": 1,
    }
    assert (await read_generation(stuck)).status is GenerationStatus.FAILED


@pytest.mark.asyncio
async def test_reap_stale_requires_service_token(async_client):
    r = await async_client.post("/api/internal/generations/reap-stale")

    assert r.status_code == HTTPStatus.UNAUTHORIZED


def test_register_reaper_job_adds_interval_job():
    scheduler = get_scheduler()

    job_id = register_generation_reaper_job(interval_minutes=5, timeout_minutes=15)

    try:
        assert job_id == GENERATION_REAPER_JOB_ID
        status = scheduler.get_job_status(job_id)
        assert status is not None
        assert "0:05:00" in status["trigger"]
    finally:
        scheduler.remove_job(job_id)
