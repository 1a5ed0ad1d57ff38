"""
Podcast Backend: Catalog Schemas
=================================

What:  Inputs and outputs of the podcast and episode operations.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from podcast_backend.schemas.common import CoreOutput, GraphQLModel


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class EpisodeResponse(GraphQLModel):
    id: int
    title: str
    category: str
    podcast_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PodcastResponse(GraphQLModel):
    """
    Episodes are not embedded: the `Podcast.episodes` GraphQL field resolves
    them with a separate query only when a client selects it.
    """
    id: int
    title: str
    category: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CreatePodcastOutput(CoreOutput):
    id: Optional[int] = None


class GetAllPodcastsOutput(CoreOutput):
    podcasts: Optional[List[PodcastResponse]] = None


class PodcastOutput(CoreOutput):
    podcast: Optional[PodcastResponse] = None


class CreateEpisodeOutput(CoreOutput):
    id: Optional[int] = None


class EpisodesOutput(CoreOutput):
    episodes: Optional[List[EpisodeResponse]] = None


# ══════════════════════════════════════════════════════════════════════════
# Input Models
# ══════════════════════════════════════════════════════════════════════════


class CreatePodcastInput(GraphQLModel):
    title: str = Field(max_length=255)
    category: str = Field(max_length=255)


class PodcastSearchInput(GraphQLModel):
    id: int


class UpdatePodcastPayload(GraphQLModel):
    title: Optional[str] = Field(default=None, max_length=255)
    category: Optional[str] = Field(default=None, max_length=255)


class UpdatePodcastInput(GraphQLModel):
    id: int
    payload: UpdatePodcastPayload


class CreateEpisodeInput(GraphQLModel):
    podcast_id: int
    title: str = Field(max_length=255)
    category: str = Field(max_length=255)


class EpisodesSearchInput(GraphQLModel):
    podcast_id: int
    episode_id: int


class UpdateEpisodeInput(EpisodesSearchInput):
    title: Optional[str] = Field(default=None, max_length=255)
    category: Optional[str] = Field(default=None, max_length=255)
