"""Tests for transactional sessions."""

import pytest

from autolog.database import session_scope
from autolog.services.account_service import AccountService


class TestSessionScope:
    """session_scope commits a unit of work or discards all of it."""

    @pytest.mark.asyncio
    async def test_commits_on_success(self, session_maker):
        async with session_scope(session_maker) as session:
            await AccountService(session).create("kept")

        async with session_maker() as session:
            assert await AccountService(session).get_by_username("kept") is not None

    @pytest.mark.asyncio
    async def test_rolls_back_on_error(self, session_maker):
        with pytest.raises(RuntimeError):
            async with session_scope(session_maker) as session:
                await AccountService(session).create("discarded")
                raise RuntimeError("link failed")

        async with session_maker() as session:
            assert await AccountService(session).get_by_username("discarded") is None
