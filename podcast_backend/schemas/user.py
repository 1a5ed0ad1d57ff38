"""
Podcast Backend: Account Schemas
=================================

What:  Inputs and outputs of createAccount, login, seeProfile, me and editProfile.

Security:
    UserResponse has no password field; building it `from_attributes` off an
    ORM User can never leak the hash.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from podcast_backend.models.user import UserRole
from podcast_backend.schemas.common import CoreOutput, GraphQLModel


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class UserResponse(GraphQLModel):
    id: int
    email: str
    role: UserRole
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CreateAccountOutput(CoreOutput):
    pass


class LoginOutput(CoreOutput):
    token: Optional[str] = Field(default=None, description="Bearer token for the X-JWT header")


class UserProfileOutput(CoreOutput):
    user: Optional[UserResponse] = None


class EditProfileOutput(CoreOutput):
    pass


# ══════════════════════════════════════════════════════════════════════════
# Input Models
# ══════════════════════════════════════════════════════════════════════════


class CreateAccountInput(GraphQLModel):
    email: str = Field(max_length=255)
    password: str
    role: UserRole


class LoginInput(GraphQLModel):
    email: str
    password: str


class EditProfileInput(GraphQLModel):
    """Partial update: omitted (or null) fields are left untouched."""
    email: Optional[str] = Field(default=None, max_length=255)
    password: Optional[str] = None
