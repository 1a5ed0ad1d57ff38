"""
Podcast Backend: Credential Store
==================================

What:  Persists user identity records and owns password hashing.
How:   bcrypt hashes (cost from BCRYPT_ROUNDS) computed in a worker thread so
       the event loop keeps serving other requests; rows go through the
       UserRepository inside one Store transaction per call.
Who:   AccountService (account operations) and AccessGuard (token → user).

Email policy:
    Uniqueness is an exact string match. A pre-insert lookup gives the
    friendly EmailTakenError; the unique index on users.email is the backstop
    for two concurrent signups with the same address.
"""

import asyncio
import logging
from typing import Optional

import bcrypt
from sqlalchemy.exc import IntegrityError

from podcast_backend.exceptions import EmailTakenError, UserNotFoundError
from podcast_backend.models.user import User, UserRole
from podcast_backend.repositories import Store

logger = logging.getLogger(__name__)


def hash_password(password: str, rounds: int = 12) -> str:
    """Hash a password using bcrypt"""
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def check_password(password: str, password_hash: str) -> bool:
    """Verify a password against its hash"""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


class CredentialStore:
    """User records: create, look up, update, verify passwords."""

    def __init__(self, store: Store, bcrypt_rounds: int = 12):
        self._store = store
        self._rounds = bcrypt_rounds

    async def _hash(self, password: str) -> str:
        return await asyncio.to_thread(hash_password, password, self._rounds)

    async def create_user(self, email: str, password: str, role: UserRole) -> User:
        """
        Insert a new user with a hashed password.

        Raises:
            EmailTakenError: the email is already registered
        """
        password_hash = await self._hash(password)
        try:
            async with self._store.transaction() as uow:
                if await uow.users.find_one(email=email) is not None:
                    raise EmailTakenError(email)
                user = await uow.users.save(
                    User(email=email, password=password_hash, role=UserRole(role).value)
                )
        except IntegrityError:
            # Lost a race with a concurrent signup for the same address
            raise EmailTakenError(email, context={"source": "unique_constraint"})

        logger.info("Created user %s (role=%s)", user.id, user.role)
        return user

    async def find_by_email(self, email: str) -> Optional[User]:
        async with self._store.transaction() as uow:
            return await uow.users.find_one(email=email)

    async def find_by_id(self, user_id: int) -> Optional[User]:
        async with self._store.transaction() as uow:
            return await uow.users.find_one(id=user_id)

    async def update_user(
        self,
        user_id: int,
        email: Optional[str] = None,
        password: Optional[str] = None,
    ) -> User:
        """
        Partial update: only the supplied fields change.

        Raises:
            UserNotFoundError: no user with this id
            EmailTakenError: the new email belongs to another user
        """
        password_hash = await self._hash(password) if password is not None else None
        try:
            async with self._store.transaction() as uow:
                user = await uow.users.find_one(id=user_id)
                if user is None:
                    raise UserNotFoundError(user_id)

                if email is not None and email != user.email:
                    if await uow.users.find_one(email=email) is not None:
                        raise EmailTakenError(email)
                    user.email = email
                if password_hash is not None:
                    user.password = password_hash

                await uow.users.save(user)
        except IntegrityError:
            raise EmailTakenError(email or "", context={"source": "unique_constraint"})

        logger.info("Updated user %s", user_id)
        return user

    async def verify_password(self, user: User, password: str) -> bool:
        return await asyncio.to_thread(check_password, password, user.password)
