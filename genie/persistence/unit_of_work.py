"""SQLAlchemy unit of work."""

import logfire
from sqlalchemy.ext.asyncio import AsyncSession

from genie.domain.error import StorageError
from genie.domain.repository import UnitOfWork
from genie.persistence.database import storage_errors


class SqlAlchemyUnitOfWork(UnitOfWork):
    """Unit of work over the request-scoped session."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def commit(self) -> None:
        try:
            with storage_errors("commit"):
                await self.session.commit()
        except StorageError:
            await self.rollback()
            raise
        logfire.info("Session committed")

    async def rollback(self) -> None:
        with storage_errors("rollback"):
            await self.session.rollback()
        logfire.info("Session rolled back")
