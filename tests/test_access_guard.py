"""
Podcast Backend: Access Guard Unit Tests
=========================================

What:  Tests for X-JWT → identity resolution and the `login_required` gate.
How:   Real TokenService, mocked CredentialStore (no database).

What we test:
    ✅ Missing, invalid and orphaned tokens all yield an anonymous identity
    ✅ Valid token attaches the user record
    ✅ login_required raises "Forbidden resource" only for anonymous callers
"""

from types import SimpleNamespace

import pytest
from starlette.datastructures import Headers

from podcast_backend.exceptions import ForbiddenError
from podcast_backend.models.user import User
from podcast_backend.services.access_guard import ANONYMOUS, AccessGuard, Identity, login_required


def make_user(user_id=1, email="a@b.com"):
    return User(id=user_id, email=email, password="hash", role="Listener")


class TestIdentify:
    @pytest.fixture(autouse=True)
    def _guard(self, token_service, mock_credentials):
        self.tokens = token_service
        self.credentials = mock_credentials
        self.guard = AccessGuard(token_service, mock_credentials)

    @pytest.mark.asyncio
    async def test_no_token_is_anonymous(self):
        identity = await self.guard.identify(None)

        assert identity is ANONYMOUS
        assert not identity.is_authenticated
        self.credentials.find_by_id.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_invalid_token_is_anonymous(self):
        identity = await self.guard.identify("garbage")

        assert not identity.is_authenticated
        self.credentials.find_by_id.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_valid_token_attaches_user(self):
        user = make_user(user_id=7)
        self.credentials.find_by_id.return_value = user

        identity = await self.guard.identify(self.tokens.issue(7))

        assert identity.is_authenticated
        assert identity.user is user
        assert identity.user_id == 7
        self.credentials.find_by_id.assert_awaited_once_with(7)

    @pytest.mark.asyncio
    async def test_token_for_missing_user_is_anonymous(self):
        self.credentials.find_by_id.return_value = None

        identity = await self.guard.identify(self.tokens.issue(99))

        assert not identity.is_authenticated

    @pytest.mark.asyncio
    async def test_context_reads_header_case_insensitively(self):
        self.credentials.find_by_id.return_value = make_user()
        request = SimpleNamespace(headers=Headers({"x-jwt": self.tokens.issue(1)}))

        context = await self.guard.context_for_request(request, {})

        assert context["request"] is request
        assert context["identity"].user_id == 1

    @pytest.mark.asyncio
    async def test_context_without_header_is_anonymous(self):
        request = SimpleNamespace(headers=Headers({}))

        context = await self.guard.context_for_request(request, {})

        assert context["identity"] is ANONYMOUS


class TestLoginRequired:
    @staticmethod
    def make_info(identity):
        return SimpleNamespace(context={"identity": identity}, field_name="me")

    @pytest.mark.asyncio
    async def test_anonymous_caller_is_forbidden(self):
        @login_required
        async def resolver(obj, info):
            return "secret"

        with pytest.raises(ForbiddenError) as exc_info:
            await resolver(None, self.make_info(ANONYMOUS))

        assert str(exc_info.value) == "Forbidden resource"

    @pytest.mark.asyncio
    async def test_missing_identity_is_forbidden(self):
        @login_required
        async def resolver(obj, info):
            return "secret"

        with pytest.raises(ForbiddenError):
            await resolver(None, SimpleNamespace(context={}, field_name="me"))

    @pytest.mark.asyncio
    async def test_authenticated_caller_passes_through(self):
        @login_required
        async def resolver(obj, info, **args):
            return args["input"]

        info = self.make_info(Identity(user=make_user()))
        assert await resolver(None, info, input="payload") == "payload"
