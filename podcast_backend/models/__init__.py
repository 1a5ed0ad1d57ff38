"""
ORM models. Importing this package registers every table on `Base.metadata`.
"""

from podcast_backend.models.episode import Episode
from podcast_backend.models.podcast import Podcast
from podcast_backend.models.user import User, UserRole

__all__ = ["Episode", "Podcast", "User", "UserRole"]
