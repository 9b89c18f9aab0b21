"""
Integration tests for UserRepository against SQLite
"""
from datetime import datetime, timedelta

import pytest

from account_gate.adapter.repositories.user_repository import UserRepository
from account_gate.app.use_cases.auth.reset_tokens import hash_reset_token
from tests.fixtures.users import create_test_user

EXPIRES = datetime(2026, 3, 1, 13, 0, 0)
TOKEN = "f" * 40


@pytest.mark.asyncio
async def test_token_valid_before_expiry(db_session):
    user = await create_test_user(db_session, reset_token=TOKEN, reset_expires=EXPIRES)
    repo = UserRepository(db_session)

    found = await repo.get_by_valid_reset_token(
        hash_reset_token(TOKEN), EXPIRES - timedelta(microseconds=1)
    )

    assert found is not None
    assert found.id == user.id


@pytest.mark.asyncio
async def test_token_invalid_at_expiry(db_session):
    await create_test_user(db_session, reset_token=TOKEN, reset_expires=EXPIRES)
    repo = UserRepository(db_session)

    assert await repo.get_by_valid_reset_token(hash_reset_token(TOKEN), EXPIRES) is None


@pytest.mark.asyncio
async def test_token_invalid_just_after_expiry(db_session):
    await create_test_user(db_session, reset_token=TOKEN, reset_expires=EXPIRES)
    repo = UserRepository(db_session)

    found = await repo.get_by_valid_reset_token(
        hash_reset_token(TOKEN), EXPIRES + timedelta(microseconds=1)
    )

    assert found is None


@pytest.mark.asyncio
async def test_token_must_match_exactly(db_session):
    await create_test_user(db_session, reset_token=TOKEN, reset_expires=EXPIRES)
    repo = UserRepository(db_session)
    now = EXPIRES - timedelta(minutes=30)

    assert await repo.get_by_valid_reset_token(hash_reset_token(TOKEN[:-1]), now) is None
    assert await repo.get_by_valid_reset_token(TOKEN, now) is None  # plaintext is never stored


@pytest.mark.asyncio
async def test_user_without_token_never_matches(db_session):
    await create_test_user(db_session)
    repo = UserRepository(db_session)

    assert await repo.get_by_valid_reset_token(hash_reset_token(""), EXPIRES) is None


@pytest.mark.asyncio
async def test_get_by_email_and_update(db_session):
    user = await create_test_user(db_session, email="user@example.com")
    repo = UserRepository(db_session)

    found = await repo.get_by_email("user@example.com")
    assert found.id == user.id
    assert await repo.get_by_email("other@example.com") is None

    found.set_reset_token(hash_reset_token(TOKEN), EXPIRES)
    await repo.update(found)
    await db_session.commit()

    again = await repo.get_by_id(user.id)
    assert again.reset_password_token == hash_reset_token(TOKEN)
    assert again.reset_password_expires == EXPIRES
