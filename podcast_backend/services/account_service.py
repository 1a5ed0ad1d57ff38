"""
Podcast Backend: Account Service
=================================

What:  createAccount, login, seeProfile, me and editProfile.
How:   Delegates persistence to the CredentialStore and token minting to the
       TokenService; translates domain exceptions into `{ok, error}` envelopes.
Who:   Called by the GraphQL resolvers.

Error Handling Strategy:
    Expected conditions (email taken, unknown user, wrong password) become
    envelopes with fixed messages. createAccount additionally folds any
    SQLAlchemy failure into a generic message; every other operation lets
    infrastructure errors propagate.
"""

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from podcast_backend.exceptions import (
    EMAIL_TAKEN_MESSAGE,
    USER_NOT_FOUND_MESSAGE,
    EmailTakenError,
    UserNotFoundError,
)
from podcast_backend.models.user import User, UserRole
from podcast_backend.schemas.user import (
    CreateAccountOutput,
    EditProfileOutput,
    LoginOutput,
    UserProfileOutput,
    UserResponse,
)
from podcast_backend.services.credential_store import CredentialStore
from podcast_backend.services.token_service import TokenService

logger = logging.getLogger(__name__)

CREATE_ACCOUNT_FAILED_MESSAGE = "Couldn't create account"
LOGIN_USER_NOT_FOUND_MESSAGE = "User not found"
WRONG_PASSWORD_MESSAGE = "Wrong password"


class AccountService:
    """Account operations over the credential store."""

    def __init__(self, credentials: CredentialStore, tokens: TokenService):
        self._credentials = credentials
        self._tokens = tokens

    async def create_account(
        self, email: str, password: str, role: UserRole
    ) -> CreateAccountOutput:
        try:
            await self._credentials.create_user(email, password, role)
        except EmailTakenError:
            return CreateAccountOutput.fail(EMAIL_TAKEN_MESSAGE)
        except SQLAlchemyError as e:
            logger.error("Account creation failed: %s", type(e).__name__, exc_info=True)
            return CreateAccountOutput.fail(CREATE_ACCOUNT_FAILED_MESSAGE)
        return CreateAccountOutput.success()

    async def login(self, email: str, password: str) -> LoginOutput:
        """
        Check credentials and mint a token.

        The account lookup and the password check report different errors:
        "User not found" vs "Wrong password". `token` is null in both.
        """
        user = await self._credentials.find_by_email(email)
        if user is None:
            return LoginOutput.fail(LOGIN_USER_NOT_FOUND_MESSAGE)

        if not await self._credentials.verify_password(user, password):
            logger.info("Rejected login for user %s: wrong password", user.id)
            return LoginOutput.fail(WRONG_PASSWORD_MESSAGE)

        return LoginOutput.success(token=self._tokens.issue(user.id))

    async def see_profile(self, user_id: int) -> UserProfileOutput:
        user = await self._credentials.find_by_id(user_id)
        if user is None:
            return UserProfileOutput.fail(USER_NOT_FOUND_MESSAGE)
        return UserProfileOutput.success(user=UserResponse.model_validate(user))

    def me(self, user: User) -> UserResponse:
        return UserResponse.model_validate(user)

    async def edit_profile(
        self,
        user_id: int,
        email: Optional[str] = None,
        password: Optional[str] = None,
    ) -> EditProfileOutput:
        try:
            await self._credentials.update_user(user_id, email=email, password=password)
        except EmailTakenError:
            return EditProfileOutput.fail(EMAIL_TAKEN_MESSAGE)
        except UserNotFoundError:
            return EditProfileOutput.fail(USER_NOT_FOUND_MESSAGE)
        return EditProfileOutput.success()
