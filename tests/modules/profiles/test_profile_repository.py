# -*- coding: utf-8 -*-
"""
backend/tests/modules/profiles/test_profile_repository.py

Escrituras atómicas de saldo: el débito nunca deja créditos negativos.

Autor: Adlibify
Fecha: 2026-10-19
"""

import uuid

import pytest

from app.modules.profiles.repositories import ProfileRepository


@pytest.mark.asyncio
async def test_add_credits_returns_new_total(db_session, make_profile):
    user_id = await make_profile(credits=1)
    repo = ProfileRepository()

    total = await repo.add_credits(db_session, user_id, 30)
    await db_session.commit()

    assert total == 31
    assert await repo.get_credits(db_session, user_id) == 31


@pytest.mark.asyncio
async def test_add_credits_unknown_profile_returns_none(db_session):
    assert await ProfileRepository().add_credits(db_session, uuid.uuid4(), 5) is None


@pytest.mark.asyncio
async def test_add_credits_rejects_non_positive_amount(db_session, make_profile):
    user_id = await make_profile()

    with pytest.raises(ValueError):
        await ProfileRepository().add_credits(db_session, user_id, 0)


@pytest.mark.asyncio
async def test_debit_stops_at_zero(db_session, make_profile):
    user_id = await make_profile(credits=1)
    repo = ProfileRepository()

    assert await repo.debit_one_credit(db_session, user_id) is True
    assert await repo.debit_one_credit(db_session, user_id) is False
    await db_session.commit()

    assert await repo.get_credits(db_session, user_id) == 0
