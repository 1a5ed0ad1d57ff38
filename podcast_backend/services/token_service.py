"""
Podcast Backend: Token Service
===============================

What:  Issues and verifies the bearer tokens clients send in the X-JWT header.
How:   Signs a JSON payload `{"id": <user id>}` with itsdangerous (HMAC), so a
       token can't be forged or altered without the server secret.
Who:   AccountService.login() issues; AccessGuard verifies.

Tokens are stateless: verifying one needs no database access. The payload
carries a signing timestamp, so expiry is just a `max_age` away; it is off
unless TOKEN_MAX_AGE is set.
"""

import logging
from typing import Optional

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from podcast_backend.exceptions import InvalidTokenError

logger = logging.getLogger(__name__)

TOKEN_SALT = "podcast-backend-session"


class TokenService:
    """
    Signed, stateless session tokens.

    Contract:
        - issue(user_id) returns an opaque URL-safe string
        - verify(token) returns the user id or raises InvalidTokenError
    """

    def __init__(self, secret_key: str, max_age: Optional[int] = None):
        if not secret_key:
            raise ValueError("TokenService requires a non-empty secret key")
        self._serializer = URLSafeTimedSerializer(secret_key=secret_key, salt=TOKEN_SALT)
        self._max_age = max_age

    def issue(self, user_id: int) -> str:
        return self._serializer.dumps({"id": user_id})

    def verify(self, token: str) -> int:
        if not token:
            raise InvalidTokenError("Missing token")
        try:
            data = self._serializer.loads(token, max_age=self._max_age)
        except SignatureExpired:
            raise InvalidTokenError("Token expired")
        except BadSignature:
            raise InvalidTokenError("Invalid token signature")

        user_id = data.get("id") if isinstance(data, dict) else None
        # bool is an int subclass; a payload of {"id": true} is not a user id
        if not isinstance(user_id, int) or isinstance(user_id, bool):
            raise InvalidTokenError("Invalid token payload")
        return user_id
