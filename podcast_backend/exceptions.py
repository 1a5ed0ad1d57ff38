"""
Podcast Backend: Custom Exception Hierarchy
============================================

What:  Application-specific exceptions for the account, token and catalog layers.
How:   Each exception carries a user-facing message and an optional context dict.
       Services translate most of them into `{ok: false, error}` envelopes;
       only ForbiddenError reaches the client as a top-level GraphQL error.
Who:   Raised by the credential store, token service, access guard and services.

Exception Hierarchy:
    PodcastBackendError (base)
    ├── EmailTakenError      → envelope: "There is a user with that email already"
    ├── UserNotFoundError    → envelope: "User Not Found"
    ├── NotFoundError        → envelope: "<Resource> with ID <id> not found"
    ├── InvalidTokenError    → caught by the access guard (request stays anonymous)
    ├── InvalidInputError    → envelope: "Invalid <field>: <reason>"
    └── ForbiddenError       → GraphQL error "Forbidden resource"
"""

from typing import Any, Dict, Optional

EMAIL_TAKEN_MESSAGE = "There is a user with that email already"
USER_NOT_FOUND_MESSAGE = "User Not Found"
FORBIDDEN_MESSAGE = "Forbidden resource"


class PodcastBackendError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class EmailTakenError(PodcastBackendError):
    """Raised when an account is created (or edited) with an email already in use."""

    def __init__(self, email: str, context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        ctx["email"] = email
        super().__init__(message=EMAIL_TAKEN_MESSAGE, context=ctx)
        self.email = email


class UserNotFoundError(PodcastBackendError):
    """Raised when a user lookup by id misses."""

    def __init__(self, user_id: int, context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        ctx["user_id"] = user_id
        super().__init__(message=USER_NOT_FOUND_MESSAGE, context=ctx)
        self.user_id = user_id


class NotFoundError(PodcastBackendError):
    """
    Raised when a requested catalog entity does not exist.

    SQLAlchemy returns None for missing rows; the catalog service converts
    None into this exception and then into an envelope carrying `message`.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[int] = None,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        if message is None:
            message = f"The requested {resource} was not found"
            if resource_id is not None:
                message = f"{resource} with ID {resource_id} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class InvalidTokenError(PodcastBackendError):
    """Raised when a bearer token is malformed, tampered with, or expired."""

    def __init__(
        self,
        message: str = "Invalid token",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ForbiddenError(PodcastBackendError):
    """
    Raised when an identity-requiring operation runs without an identity.

    The message is fixed; GraphQL clients match on it.
    """

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(message=FORBIDDEN_MESSAGE, context=context)


class InvalidInputError(PodcastBackendError):
    """
    Raised when GraphQL arguments pass the schema but fail model validation
    (e.g. a title longer than the column allows).

    Only the first offending field is reported.
    """

    def __init__(self, field: str, reason: str, context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        ctx["field"] = field
        super().__init__(message=f"Invalid {field}: {reason}", context=ctx)
        self.field = field
