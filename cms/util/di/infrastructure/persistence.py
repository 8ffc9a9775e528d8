"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from cms.config import Settings
from cms.domain.repository import (
    CategoryRepository,
    PostRepository,
    TagRepository,
    UserRepository,
)
from cms.persistence.database import create_engine, create_session_factory
from cms.persistence.repository import (
    PostgresCategoryRepository,
    PostgresPostRepository,
    PostgresTagRepository,
    PostgresUserRepository,
)
from cms.persistence.transaction import TransactionState
from cms.util.di.base import ProviderBase
from cms.util.observability import instrument_sqlalchemy


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
    def get_transaction_state(self) -> TransactionState:
        """Provide the request's commit-or-rollback flag."""
        return TransactionState()

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        transaction: TransactionState,
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        One request is one transaction: slug resolution, the insert and tag
        reconciliation commit together or not at all. The container sends the
        scope's exception back through ``yield``; that, or a transaction
        marked failed by an error response, rolls back.
        """
        async with session_factory() as session:
            error = yield session
            if error is not None or transaction.failed:
                reason = str(error) if error is not None else transaction.reason
                await session.rollback()
                logfire.warn("Session rollback", reason=reason)
            else:
                await session.commit()
                logfire.info("Session committed")

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, session: AsyncSession) -> UserRepository:
        """Provide User repository."""
        return PostgresUserRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_post_repository(self, session: AsyncSession) -> PostRepository:
        """Provide Post repository."""
        return PostgresPostRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_category_repository(self, session: AsyncSession) -> CategoryRepository:
        """Provide Category repository."""
        return PostgresCategoryRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_tag_repository(self, session: AsyncSession) -> TagRepository:
        """Provide Tag repository."""
        return PostgresTagRepository(session)
