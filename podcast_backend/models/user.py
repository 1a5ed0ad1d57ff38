"""
Podcast Backend: User SQLAlchemy Model
=======================================

What:  ORM model representing the `users` table.
Who:   Read and written only through the credential store.

Table Design:
    - email: unique index; uniqueness is the one write-time invariant on users
    - password: bcrypt hash, never selected into an API response
    - role: stored as the enum's string value (Listener / Host)
"""

import enum

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from podcast_backend.database import Base
from podcast_backend.models.base import CoreColumns


class UserRole(str, enum.Enum):
    Listener = "Listener"
    Host = "Host"


class User(CoreColumns, Base):
    """
    A registered account.

    Lifecycle:
        1. Created by createAccount (password hashed before insert)
        2. Email and/or password changed by editProfile
        3. Never deleted
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
    )

    password: Mapped[str] = mapped_column(String(255), nullable=False)

    role: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default=UserRole.Listener.value,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"
