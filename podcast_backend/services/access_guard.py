"""
Podcast Backend: Access Guard
==============================

What:  Turns the X-JWT header of each request into an identity context, and
       gates resolvers that need one.
How:   `identify()` verifies the token and loads the user; anything that goes
       wrong on the way leaves the request anonymous. The reject decision
       belongs to the operation: resolvers decorated with `login_required`
       raise ForbiddenError when the context is anonymous.
Who:   Called by the GraphQL endpoint to build the per-request context.
When:  Once per GraphQL request, before any resolver runs.

There are no per-resource ownership checks: an identity is either present
or not.
"""

import functools
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from podcast_backend.exceptions import ForbiddenError, InvalidTokenError
from podcast_backend.models.user import User
from podcast_backend.services.credential_store import CredentialStore
from podcast_backend.services.token_service import TokenService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    """Per-request identity; `user is None` means anonymous."""

    user: Optional[User] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def user_id(self) -> Optional[int]:
        return self.user.id if self.user is not None else None


ANONYMOUS = Identity()


class AccessGuard:
    """Resolves bearer tokens to users; never rejects a request by itself."""

    def __init__(
        self,
        tokens: TokenService,
        credentials: CredentialStore,
        header_name: str = "X-JWT",
    ):
        self._tokens = tokens
        self._credentials = credentials
        self.header_name = header_name

    async def identify(self, token: Optional[str]) -> Identity:
        if not token:
            return ANONYMOUS

        try:
            user_id = self._tokens.verify(token)
        except InvalidTokenError as e:
            logger.debug("Ignoring bearer token: %s", e.message)
            return ANONYMOUS

        user = await self._credentials.find_by_id(user_id)
        if user is None:
            logger.debug("Token refers to missing user %s", user_id)
            return ANONYMOUS
        return Identity(user=user)

    async def context_for_request(self, request: Any, data: Any = None) -> Dict[str, Any]:
        """
        GraphQL context factory: `{"request": ..., "identity": Identity}`.

        Signature matches Ariadne's `context_value(request, data)` callable.
        """
        identity = await self.identify(request.headers.get(self.header_name))
        return {"request": request, "identity": identity}


def current_identity(info) -> Identity:
    return info.context.get("identity", ANONYMOUS)


def login_required(resolver):
    """
    Resolver decorator for identity-requiring operations.

    Raises ForbiddenError ("Forbidden resource") for anonymous callers; the
    GraphQL layer reports it in the top-level `errors` list.
    """

    @functools.wraps(resolver)
    async def wrapper(obj, info, **kwargs):
        if not current_identity(info).is_authenticated:
            raise ForbiddenError(context={"field": info.field_name})
        return await resolver(obj, info, **kwargs)

    return wrapper
