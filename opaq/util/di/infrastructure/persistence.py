"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

import logfire
from dishka import Scope, provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from opaq.config import Settings
from opaq.domain.repository import (
    DiscussionInteractionRepository,
    DiscussionRepository,
    PitchInteractionRepository,
    PitchRepository,
    PostInteractionRepository,
    PostRepository,
    UserRepository,
)
from opaq.persistence.database import create_engine, create_session_factory
from opaq.persistence.repository import (
    PostgresDiscussionInteractionRepository,
    PostgresDiscussionRepository,
    PostgresPitchInteractionRepository,
    PostgresPitchRepository,
    PostgresPostInteractionRepository,
    PostgresPostRepository,
    PostgresUserRepository,
)
from opaq.util.di.base import ProviderBase
from opaq.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_engine(self, settings: Settings) -> AsyncEngine:
        """Provide database engine."""
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        return engine

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

        One session is one transaction: ledger writes and their counter
        deltas commit together at the end of the request, or are rolled back
        together if an exception was raised.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
                logfire.info("Session committed")
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, session: AsyncSession) -> UserRepository:
        """Provide User repository."""
        return PostgresUserRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_post_repository(self, session: AsyncSession) -> PostRepository:
        """Provide Post repository."""
        return PostgresPostRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_pitch_repository(self, session: AsyncSession) -> PitchRepository:
        """Provide Pitch repository."""
        return PostgresPitchRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_discussion_repository(self, session: AsyncSession) -> DiscussionRepository:
        """Provide Discussion repository."""
        return PostgresDiscussionRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_post_interaction_repository(
        self, session: AsyncSession
    ) -> PostInteractionRepository:
        """Provide PostInteraction repository."""
        return PostgresPostInteractionRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_discussion_interaction_repository(
        self, session: AsyncSession
    ) -> DiscussionInteractionRepository:
        """Provide DiscussionInteraction repository."""
        return PostgresDiscussionInteractionRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_pitch_interaction_repository(
        self, session: AsyncSession
    ) -> PitchInteractionRepository:
        """Provide PitchInteraction repository."""
        return PostgresPitchInteractionRepository(session)
