"""
Podcast Backend: Episode SQLAlchemy Model
==========================================

What:  ORM model representing the `episodes` table.

Every episode belongs to exactly one podcast. The foreign key cascades on
delete at the database level as a second line behind the catalog service's
explicit child delete.
"""

from sqlalchemy import ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from podcast_backend.database import Base
from podcast_backend.models.base import CoreColumns


class Episode(CoreColumns, Base):
    __tablename__ = "episodes"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[str] = mapped_column(String(255), nullable=False)

    # Fixed at creation; never reassigned
    podcast_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("podcasts.id", ondelete="CASCADE"),
        nullable=False,
    )

    __table_args__ = (
        Index("idx_episodes_podcast_id", "podcast_id"),
    )

    def __repr__(self) -> str:
        return f"<Episode(id={self.id}, podcast_id={self.podcast_id}, title='{self.title}')>"
