"""
Podcast Backend: Catalog Service Tests
=======================================

What:  Podcast and episode CRUD, not-found envelopes, (podcast, episode)
       addressing, and cascade delete.
How:   Runs against a throwaway SQLite database (see conftest `store`).
"""

import pytest

from podcast_backend.schemas.podcast import UpdatePodcastPayload


class TestPodcasts:
    @pytest.mark.asyncio
    async def test_ids_are_sequential_from_one(self, catalog_service):
        first = await catalog_service.create_podcast("hello", "hihihi")
        second = await catalog_service.create_podcast("world", "news")

        assert (first.ok, first.error, first.id) == (True, None, 1)
        assert second.id == 2

    @pytest.mark.asyncio
    async def test_get_all_in_creation_order(self, catalog_service):
        await catalog_service.create_podcast("hello", "hihihi")
        await catalog_service.create_podcast("world", "news")

        result = await catalog_service.get_all_podcasts()

        assert result.ok is True
        assert [p.id for p in result.podcasts] == [1, 2]

    @pytest.mark.asyncio
    async def test_get_all_empty(self, catalog_service):
        result = await catalog_service.get_all_podcasts()
        assert result.ok is True
        assert result.podcasts == []

    @pytest.mark.asyncio
    async def test_get_podcast(self, catalog_service):
        await catalog_service.create_podcast("hello", "hihihi")

        result = await catalog_service.get_podcast(1)

        assert result.ok is True
        assert result.podcast.title == "hello"

    @pytest.mark.asyncio
    async def test_get_podcast_not_found(self, catalog_service):
        result = await catalog_service.get_podcast(999)

        assert result.ok is False
        assert result.error == "Podcast with ID 999 not found"
        assert result.podcast is None

    @pytest.mark.asyncio
    async def test_update_is_partial(self, catalog_service):
        await catalog_service.create_podcast("hello", "hihihi")

        result = await catalog_service.update_podcast(
            1, UpdatePodcastPayload(title="updated title")
        )
        podcast = (await catalog_service.get_podcast(1)).podcast

        assert result.ok is True
        assert podcast.title == "updated title"
        assert podcast.category == "hihihi"

    @pytest.mark.asyncio
    async def test_update_missing_podcast(self, catalog_service):
        result = await catalog_service.update_podcast(3, UpdatePodcastPayload(title="x"))
        assert result.ok is False
        assert "Podcast" in result.error

    @pytest.mark.asyncio
    async def test_delete_cascades_to_episodes(self, catalog_service, store):
        await catalog_service.create_podcast("hello", "hihihi")
        await catalog_service.create_podcast("keep", "me")
        await catalog_service.create_episode(1, "ep1", "c")
        await catalog_service.create_episode(1, "ep2", "c")
        await catalog_service.create_episode(2, "other", "c")

        result = await catalog_service.delete_podcast(1)

        assert result.ok is True
        assert (await catalog_service.get_podcast(1)).ok is False
        async with store.transaction() as uow:
            assert await uow.episodes.find(podcast_id=1) == []
            assert len(await uow.episodes.find(podcast_id=2)) == 1

    @pytest.mark.asyncio
    async def test_delete_missing_podcast(self, catalog_service):
        result = await catalog_service.delete_podcast(1)
        assert result.ok is False
        assert result.error == "Podcast with ID 1 not found"


class TestEpisodes:
    @pytest.fixture(autouse=True)
    def _service(self, catalog_service):
        self.service = catalog_service

    async def _seed(self):
        await self.service.create_podcast("first", "a")
        await self.service.create_podcast("second", "b")
        await self.service.create_episode(1, "episode title", "episode good")
        await self.service.create_episode(2, "elsewhere", "b")

    @pytest.mark.asyncio
    async def test_create_episode(self):
        await self.service.create_podcast("first", "a")

        result = await self.service.create_episode(1, "episode title", "episode good")

        assert (result.ok, result.error, result.id) == (True, None, 1)

    @pytest.mark.asyncio
    async def test_create_episode_missing_podcast(self):
        result = await self.service.create_episode(42, "t", "c")

        assert result.ok is False
        assert result.error == "Podcast with ID 42 not found"
        assert result.id is None

    @pytest.mark.asyncio
    async def test_get_episodes_only_returns_own(self):
        await self._seed()

        result = await self.service.get_episodes(1)

        assert result.ok is True
        assert [(e.id, e.podcast_id) for e in result.episodes] == [(1, 1)]

    @pytest.mark.asyncio
    async def test_get_episodes_missing_podcast(self):
        result = await self.service.get_episodes(9)
        assert result.ok is False
        assert result.episodes is None

    @pytest.mark.asyncio
    async def test_episodes_of_unknown_podcast_is_empty(self):
        assert await self.service.episodes_of(9) == []

    @pytest.mark.asyncio
    async def test_update_episode_partial(self):
        await self._seed()

        result = await self.service.update_episode(1, 1, title="episode updated")
        episode = (await self.service.get_episodes(1)).episodes[0]

        assert result.ok is True
        assert episode.title == "episode updated"
        assert episode.category == "episode good"

    @pytest.mark.asyncio
    async def test_update_episode_under_wrong_podcast(self):
        await self._seed()

        result = await self.service.update_episode(2, 1, title="hijack")

        assert result.ok is False
        assert result.error == "Episode with ID 1 not found in podcast with ID 2"
        episode = (await self.service.get_episodes(1)).episodes[0]
        assert episode.title == "episode title"

    @pytest.mark.asyncio
    async def test_update_episode_missing_podcast(self):
        result = await self.service.update_episode(5, 1, title="x")
        assert result.error == "Podcast with ID 5 not found"

    @pytest.mark.asyncio
    async def test_delete_episode(self):
        await self._seed()

        result = await self.service.delete_episode(1, 1)

        assert result.ok is True
        assert (await self.service.get_episodes(1)).episodes == []

    @pytest.mark.asyncio
    async def test_delete_episode_under_wrong_podcast(self):
        await self._seed()

        result = await self.service.delete_episode(1, 2)

        assert result.ok is False
        assert len((await self.service.get_episodes(2)).episodes) == 1
