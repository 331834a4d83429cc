"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from genie.config import Settings
from genie.domain.repository import (
    ClassroomRepository,
    InvitationLinkRepository,
    PrincipalRepository,
    ProfileRepository,
    SchoolRepository,
    UnitOfWork,
)
from genie.persistence.database import create_engine, create_session_factory
from genie.persistence.repository import (
    PostgresClassroomRepository,
    PostgresInvitationLinkRepository,
    PostgresPrincipalRepository,
    PostgresProfileRepository,
    PostgresSchoolRepository,
)
from genie.persistence.unit_of_work import SqlAlchemyUnitOfWork
from genie.util.di.base import ProviderBase
from genie.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """Provide database engine, disposed with the container."""
        engine = create_engine(settings)
        # Instrument SQLAlchemy for observability
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        Writes are committed by the use case through ``UnitOfWork``; closing
        the session discards anything left uncommitted.
        """
        async with session_factory() as session:
            yield session

    @provide(scope=Scope.REQUEST)
    def get_unit_of_work(self, session: AsyncSession) -> UnitOfWork:
        """Provide unit of work over the request session."""
        return SqlAlchemyUnitOfWork(session)

    @provide(scope=Scope.REQUEST)
    def get_principal_repository(self, session: AsyncSession) -> PrincipalRepository:
        """Provide identity store repository."""
        return PostgresPrincipalRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_profile_repository(self, session: AsyncSession) -> ProfileRepository:
        """Provide Profile repository."""
        return PostgresProfileRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_school_repository(self, session: AsyncSession) -> SchoolRepository:
        """Provide School repository."""
        return PostgresSchoolRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_classroom_repository(self, session: AsyncSession) -> ClassroomRepository:
        """Provide Classroom repository."""
        return PostgresClassroomRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_invitation_link_repository(
        self, session: AsyncSession
    ) -> InvitationLinkRepository:
        """Provide invitation ledger repository."""
        return PostgresInvitationLinkRepository(session)
