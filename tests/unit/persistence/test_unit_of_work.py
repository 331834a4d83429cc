"""Unit tests for the unit of work implementations."""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError

from genie.domain.error import ForbiddenError, StorageError
from genie.persistence.repository.inmemory import InMemoryUnitOfWork
from genie.persistence.unit_of_work import SqlAlchemyUnitOfWork


def session_failing_on_commit() -> AsyncMock:
    session = AsyncMock()
    session.commit.side_effect = OperationalError(
        "COMMIT", {}, Exception("connection reset")
    )
    return session


class TestSqlAlchemyUnitOfWork:
    @pytest.mark.asyncio
    async def test_commit(self):
        session = AsyncMock()
        unit_of_work = SqlAlchemyUnitOfWork(session)

        await unit_of_work.commit()

        session.commit.assert_awaited_once()
        session.rollback.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_failed_commit_rolls_back_and_raises_storage_error(self):
        session = session_failing_on_commit()
        unit_of_work = SqlAlchemyUnitOfWork(session)

        with pytest.raises(StorageError, match="during commit"):
            await unit_of_work.commit()

        session.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_transaction_reports_commit_failure(self):
        session = session_failing_on_commit()
        unit_of_work = SqlAlchemyUnitOfWork(session)

        with pytest.raises(StorageError):
            async with unit_of_work.transaction():
                pass

        session.rollback.assert_awaited_once()


class TestTransaction:
    @pytest.mark.asyncio
    async def test_commits_on_success(self):
        unit_of_work = InMemoryUnitOfWork()

        async with unit_of_work.transaction():
            pass

        assert unit_of_work.commits == 1
        assert unit_of_work.rollbacks == 0

    @pytest.mark.asyncio
    async def test_rolls_back_on_domain_error(self):
        unit_of_work = InMemoryUnitOfWork()

        with pytest.raises(ForbiddenError):
            async with unit_of_work.transaction():
                raise ForbiddenError()

        assert unit_of_work.commits == 0
        assert unit_of_work.rollbacks == 1
