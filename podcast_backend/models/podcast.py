"""
Podcast Backend: Podcast SQLAlchemy Model
==========================================

What:  ORM model representing the `podcasts` table.

There is no `relationship()` to episodes: episodes are loaded
with an explicit query (`EpisodeRepository.find(podcast_id=...)`) and
removed explicitly when their podcast is deleted.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from podcast_backend.database import Base
from podcast_backend.models.base import CoreColumns


class Podcast(CoreColumns, Base):
    __tablename__ = "podcasts"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<Podcast(id={self.id}, title='{self.title}')>"
