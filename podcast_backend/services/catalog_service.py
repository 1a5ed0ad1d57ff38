"""
Podcast Backend: Catalog Service (Podcasts & Episodes)
=======================================================

What:  CRUD over podcasts and the episodes nested under them.
How:   Each operation runs in one Store transaction. Missing rows become
       NotFoundError internally and `{ok: false, error}` envelopes externally.
Who:   Called by the GraphQL resolvers; no operation looks at the caller's identity.

Addressing Rules:
    - Podcasts are addressed by id.
    - Episodes are addressed by the (podcast_id, episode_id) pair; an episode
      that exists under a different podcast is reported as not found.
    - Deleting a podcast deletes its episodes in the same transaction.
"""

import logging
from typing import List, Optional

from podcast_backend.exceptions import NotFoundError
from podcast_backend.models import Episode, Podcast
from podcast_backend.repositories import Store, UnitOfWork
from podcast_backend.schemas.common import CoreOutput
from podcast_backend.schemas.podcast import (
    CreateEpisodeOutput,
    CreatePodcastOutput,
    EpisodeResponse,
    EpisodesOutput,
    GetAllPodcastsOutput,
    PodcastOutput,
    PodcastResponse,
    UpdatePodcastPayload,
)

logger = logging.getLogger(__name__)


def episode_not_found(podcast_id: int, episode_id: int) -> NotFoundError:
    return NotFoundError(
        resource="Episode",
        resource_id=episode_id,
        message=f"Episode with ID {episode_id} not found in podcast with ID {podcast_id}",
        context={"podcast_id": podcast_id},
    )


class CatalogService:
    """
    Podcast and episode operations.

    Responsibilities:
        - create/get/update/delete podcasts
        - create/list/update/delete episodes of a podcast
    """

    def __init__(self, store: Store):
        self._store = store

    # ── Lookups ───────────────────────────────────────────────────────────

    async def _get_podcast(self, uow: UnitOfWork, podcast_id: int) -> Podcast:
        podcast = await uow.podcasts.find_one(id=podcast_id)
        if podcast is None:
            raise NotFoundError(resource="Podcast", resource_id=podcast_id)
        return podcast

    async def _get_episode(
        self, uow: UnitOfWork, podcast_id: int, episode_id: int
    ) -> Episode:
        await self._get_podcast(uow, podcast_id)
        episode = await uow.episodes.find_one(id=episode_id, podcast_id=podcast_id)
        if episode is None:
            raise episode_not_found(podcast_id, episode_id)
        return episode

    # ── Podcasts ──────────────────────────────────────────────────────────

    async def create_podcast(self, title: str, category: str) -> CreatePodcastOutput:
        async with self._store.transaction() as uow:
            podcast = await uow.podcasts.save(Podcast(title=title, category=category))
        logger.info("Created podcast %s", podcast.id)
        return CreatePodcastOutput.success(id=podcast.id)

    async def get_all_podcasts(self) -> GetAllPodcastsOutput:
        async with self._store.transaction() as uow:
            podcasts = await uow.podcasts.find()
        return GetAllPodcastsOutput.success(
            podcasts=[PodcastResponse.model_validate(p) for p in podcasts]
        )

    async def get_podcast(self, podcast_id: int) -> PodcastOutput:
        try:
            async with self._store.transaction() as uow:
                podcast = await self._get_podcast(uow, podcast_id)
        except NotFoundError as e:
            return PodcastOutput.fail(e.message)
        return PodcastOutput.success(podcast=PodcastResponse.model_validate(podcast))

    async def update_podcast(
        self, podcast_id: int, payload: UpdatePodcastPayload
    ) -> CoreOutput:
        """Partial update: only the fields present in `payload` change."""
        changes = payload.model_dump(exclude_none=True)
        try:
            async with self._store.transaction() as uow:
                podcast = await self._get_podcast(uow, podcast_id)
                for field, value in changes.items():
                    setattr(podcast, field, value)
                await uow.podcasts.save(podcast)
        except NotFoundError as e:
            return CoreOutput.fail(e.message)
        return CoreOutput.success()

    async def delete_podcast(self, podcast_id: int) -> CoreOutput:
        try:
            async with self._store.transaction() as uow:
                podcast = await self._get_podcast(uow, podcast_id)
                removed = await uow.episodes.delete_where(podcast_id=podcast_id)
                await uow.podcasts.delete(podcast)
        except NotFoundError as e:
            return CoreOutput.fail(e.message)
        logger.info("Deleted podcast %s with %d episode(s)", podcast_id, removed)
        return CoreOutput.success()

    # ── Episodes ──────────────────────────────────────────────────────────

    async def create_episode(
        self, podcast_id: int, title: str, category: str
    ) -> CreateEpisodeOutput:
        try:
            async with self._store.transaction() as uow:
                await self._get_podcast(uow, podcast_id)
                episode = await uow.episodes.save(
                    Episode(title=title, category=category, podcast_id=podcast_id)
                )
        except NotFoundError as e:
            return CreateEpisodeOutput.fail(e.message)
        return CreateEpisodeOutput.success(id=episode.id)

    async def get_episodes(self, podcast_id: int) -> EpisodesOutput:
        try:
            async with self._store.transaction() as uow:
                await self._get_podcast(uow, podcast_id)
                episodes = await uow.episodes.find(podcast_id=podcast_id)
        except NotFoundError as e:
            return EpisodesOutput.fail(e.message)
        return EpisodesOutput.success(
            episodes=[EpisodeResponse.model_validate(e) for e in episodes]
        )

    async def episodes_of(self, podcast_id: int) -> List[EpisodeResponse]:
        """Episodes of a podcast for the `Podcast.episodes` field; [] if none."""
        async with self._store.transaction() as uow:
            episodes = await uow.episodes.find(podcast_id=podcast_id)
        return [EpisodeResponse.model_validate(e) for e in episodes]

    async def update_episode(
        self,
        podcast_id: int,
        episode_id: int,
        title: Optional[str] = None,
        category: Optional[str] = None,
    ) -> CoreOutput:
        try:
            async with self._store.transaction() as uow:
                episode = await self._get_episode(uow, podcast_id, episode_id)
                if title is not None:
                    episode.title = title
                if category is not None:
                    episode.category = category
                await uow.episodes.save(episode)
        except NotFoundError as e:
            return CoreOutput.fail(e.message)
        return CoreOutput.success()

    async def delete_episode(self, podcast_id: int, episode_id: int) -> CoreOutput:
        try:
            async with self._store.transaction() as uow:
                episode = await self._get_episode(uow, podcast_id, episode_id)
                await uow.episodes.delete(episode)
        except NotFoundError as e:
            return CoreOutput.fail(e.message)
        return CoreOutput.success()
