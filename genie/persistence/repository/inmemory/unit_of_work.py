"""In-memory unit of work."""

from genie.domain.repository import UnitOfWork


class InMemoryUnitOfWork(UnitOfWork):
    """Counts transaction outcomes; in-memory writes apply immediately."""

    def __init__(self) -> None:
        self.commits = 0
        self.rollbacks = 0

    async def commit(self) -> None:
        self.commits += 1

    async def rollback(self) -> None:
        self.rollbacks += 1
