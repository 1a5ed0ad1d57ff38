"""
Podcast Backend: GraphQL Resolver Routing Table
================================================

What:  Binds every Query/Mutation field in `schema.graphql` to a service call.
How:   Raw GraphQL arguments (camelCase) are validated into Pydantic input
       models; service envelopes are dumped back to camelCase dicts, which
       the default field resolver reads key by key. Arguments that fail
       model validation come back as that operation's `{ok: false, error}`
       envelope, never as a top-level GraphQL error.
Who:   `main.create_app()` calls `build_schema(accounts, catalog)` once.

Operation → service map:
    me              AccountService.me              (login_required)
    seeProfile      AccountService.see_profile
    editProfile     AccountService.edit_profile    (login_required)
    createAccount   AccountService.create_account
    login           AccountService.login
    getAllPodcasts  CatalogService.get_all_podcasts
    getPodcast      CatalogService.get_podcast
    createPodcast   CatalogService.create_podcast
    updatePodcast   CatalogService.update_podcast
    deletePodcast   CatalogService.delete_podcast
    getEpisodes     CatalogService.get_episodes
    createEpisode   CatalogService.create_episode
    updateEpisode   CatalogService.update_episode
    deleteEpisode   CatalogService.delete_episode
    Podcast.episodes CatalogService.episodes_of
"""

import functools
from pathlib import Path
from typing import Any, Dict, Type, TypeVar

from ariadne import MutationType, ObjectType, QueryType, load_schema_from_path, make_executable_schema
from graphql import GraphQLSchema
from pydantic import BaseModel, ValidationError

from podcast_backend.exceptions import InvalidInputError
from podcast_backend.schemas.common import CoreOutput
from podcast_backend.schemas.podcast import (
    CreateEpisodeInput,
    CreateEpisodeOutput,
    CreatePodcastInput,
    CreatePodcastOutput,
    EpisodesOutput,
    EpisodesSearchInput,
    PodcastOutput,
    PodcastSearchInput,
    UpdateEpisodeInput,
    UpdatePodcastInput,
)
from podcast_backend.schemas.user import (
    CreateAccountInput,
    CreateAccountOutput,
    EditProfileInput,
    EditProfileOutput,
    LoginInput,
    LoginOutput,
)
from podcast_backend.services.access_guard import current_identity, login_required
from podcast_backend.services.account_service import AccountService
from podcast_backend.services.catalog_service import CatalogService

SCHEMA_PATH = Path(__file__).parent / "schema.graphql"

InputT = TypeVar("InputT", bound=BaseModel)


def parse_input(model: Type[InputT], args: Dict[str, Any]) -> InputT:
    """Validate the `input` argument; raises InvalidInputError for the first bad field."""
    try:
        return model.model_validate(args["input"])
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or "input"
        raise InvalidInputError(field, first["msg"], context={"model": model.__name__}) from e


def fails_with(output: Type[CoreOutput]):
    """Resolver decorator: InvalidInputError → `output.fail(message)`."""

    def decorator(resolver):
        @functools.wraps(resolver)
        async def wrapper(obj, info, **kwargs):
            try:
                return await resolver(obj, info, **kwargs)
            except InvalidInputError as e:
                return output.fail(e.message).to_graphql()

        return wrapper

    return decorator


def build_schema(accounts: AccountService, catalog: CatalogService) -> GraphQLSchema:
    type_defs = load_schema_from_path(str(SCHEMA_PATH))

    query = QueryType()
    mutation = MutationType()
    podcast = ObjectType("Podcast")

    # ── Accounts ──────────────────────────────────────────────────────────

    @query.field("me")
    @login_required
    async def resolve_me(_, info):
        return accounts.me(current_identity(info).user).to_graphql()

    @query.field("seeProfile")
    async def resolve_see_profile(_, info, **args):
        return (await accounts.see_profile(args["userId"])).to_graphql()

    @mutation.field("createAccount")
    @fails_with(CreateAccountOutput)
    async def resolve_create_account(_, info, **args):
        data = parse_input(CreateAccountInput, args)
        result = await accounts.create_account(data.email, data.password, data.role)
        return result.to_graphql()

    @mutation.field("login")
    @fails_with(LoginOutput)
    async def resolve_login(_, info, **args):
        data = parse_input(LoginInput, args)
        return (await accounts.login(data.email, data.password)).to_graphql()

    @mutation.field("editProfile")
    @login_required
    @fails_with(EditProfileOutput)
    async def resolve_edit_profile(_, info, **args):
        data = parse_input(EditProfileInput, args)
        result = await accounts.edit_profile(
            current_identity(info).user_id,
            email=data.email,
            password=data.password,
        )
        return result.to_graphql()

    # ── Podcasts ──────────────────────────────────────────────────────────

    @query.field("getAllPodcasts")
    async def resolve_get_all_podcasts(_, info):
        return (await catalog.get_all_podcasts()).to_graphql()

    @query.field("getPodcast")
    @fails_with(PodcastOutput)
    async def resolve_get_podcast(_, info, **args):
        data = parse_input(PodcastSearchInput, args)
        return (await catalog.get_podcast(data.id)).to_graphql()

    @mutation.field("createPodcast")
    @fails_with(CreatePodcastOutput)
    async def resolve_create_podcast(_, info, **args):
        data = parse_input(CreatePodcastInput, args)
        return (await catalog.create_podcast(data.title, data.category)).to_graphql()

    @mutation.field("updatePodcast")
    @fails_with(CoreOutput)
    async def resolve_update_podcast(_, info, **args):
        data = parse_input(UpdatePodcastInput, args)
        return (await catalog.update_podcast(data.id, data.payload)).to_graphql()

    @mutation.field("deletePodcast")
    @fails_with(CoreOutput)
    async def resolve_delete_podcast(_, info, **args):
        data = parse_input(PodcastSearchInput, args)
        return (await catalog.delete_podcast(data.id)).to_graphql()

    @podcast.field("episodes")
    async def resolve_podcast_episodes(obj, info):
        return [episode.to_graphql() for episode in await catalog.episodes_of(obj["id"])]

    # ── Episodes ──────────────────────────────────────────────────────────

    @query.field("getEpisodes")
    @fails_with(EpisodesOutput)
    async def resolve_get_episodes(_, info, **args):
        data = parse_input(PodcastSearchInput, args)
        return (await catalog.get_episodes(data.id)).to_graphql()

    @mutation.field("createEpisode")
    @fails_with(CreateEpisodeOutput)
    async def resolve_create_episode(_, info, **args):
        data = parse_input(CreateEpisodeInput, args)
        result = await catalog.create_episode(data.podcast_id, data.title, data.category)
        return result.to_graphql()

    @mutation.field("updateEpisode")
    @fails_with(CoreOutput)
    async def resolve_update_episode(_, info, **args):
        data = parse_input(UpdateEpisodeInput, args)
        result = await catalog.update_episode(
            data.podcast_id,
            data.episode_id,
            title=data.title,
            category=data.category,
        )
        return result.to_graphql()

    @mutation.field("deleteEpisode")
    @fails_with(CoreOutput)
    async def resolve_delete_episode(_, info, **args):
        data = parse_input(EpisodesSearchInput, args)
        return (await catalog.delete_episode(data.podcast_id, data.episode_id)).to_graphql()

    return make_executable_schema(type_defs, query, mutation, podcast)
