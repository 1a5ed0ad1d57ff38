"""
Podcast Backend: Store, Unit of Work & Repositories
====================================================

What:  Repository-style access per entity (`find`, `find_one`, `save`, `delete`)
       grouped into a unit of work that owns one AsyncSession.
How:   `Store.transaction()` opens a session, yields a UnitOfWork, commits on
       success and rolls back on any exception.
Who:   Constructed once in `create_app()` and passed to the credential store
       and the catalog service.
When:  Every service operation opens exactly one transaction, so multi-row
       writes (a podcast delete and its episodes) are all-or-nothing.

Example:
    async with store.transaction() as uow:
        podcast = await uow.podcasts.find_one(id=1)
        await uow.episodes.delete_where(podcast_id=podcast.id)
        await uow.podcasts.delete(podcast)
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Generic, List, Optional, Type, TypeVar

from sqlalchemy import delete, select, text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from podcast_backend.models import Episode, Podcast, User

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")


class Repository(Generic[ModelT]):
    """Thin query helpers over one mapped class; results ordered by id."""

    model: Type[ModelT]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find(self, **filters) -> List[ModelT]:
        query = select(self.model).filter_by(**filters).order_by(self.model.id)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def find_one(self, **filters) -> Optional[ModelT]:
        query = select(self.model).filter_by(**filters)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def save(self, entity: ModelT) -> ModelT:
        """Insert or update; flushing assigns the id without committing."""
        self.session.add(entity)
        await self.session.flush()
        return entity

    async def delete(self, entity: ModelT) -> None:
        await self.session.delete(entity)
        await self.session.flush()

    async def delete_where(self, **filters) -> int:
        """Bulk delete; returns the number of rows removed."""
        result = await self.session.execute(delete(self.model).filter_by(**filters))
        return result.rowcount or 0


class UserRepository(Repository[User]):
    model = User


class PodcastRepository(Repository[Podcast]):
    model = Podcast


class EpisodeRepository(Repository[Episode]):
    model = Episode


class UnitOfWork:
    """One session, three repositories."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.users = UserRepository(session)
        self.podcasts = PodcastRepository(session)
        self.episodes = EpisodeRepository(session)


class Store:
    """
    Entry point to persistence for the services.

    Wraps a session factory; holds no per-request state, so one instance is
    shared by every request.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[UnitOfWork]:
        """
        Open a unit of work.

        How it works:
            1. Creates a new session from the factory
            2. Yields a UnitOfWork bound to it
            3. On success: commits
            4. On error: rolls back and re-raises
            5. Always: closes the session (returns connection to pool)
        """
        async with self._session_factory() as session:
            try:
                yield UnitOfWork(session)
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def ping(self) -> None:
        """Round-trip `SELECT 1`; raises if the database is unreachable."""
        async with self._session_factory() as session:
            await session.execute(text("SELECT 1"))
