"""Unit of work interface."""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager


class UnitOfWork(ABC):
    """Transaction boundary shared by the repositories of one request.

    Use cases that write call ``commit`` before building their response, so
    a failed commit reaches the caller as a StorageError instead of being
    raised after the response was sent.
    """

    @abstractmethod
    async def commit(self) -> None:
        """Persist every write made since the last commit.

        Raises:
            StorageError: If the commit failed; the writes are discarded
        """

    @abstractmethod
    async def rollback(self) -> None:
        """Discard every write made since the last commit."""

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        """Commit when the block succeeds, roll back when it raises."""
        try:
            yield
        except Exception:
            await self.rollback()
            raise
        await self.commit()
