"""
Podcast Backend: Shared Model Columns
======================================

What:  Mixin adding the integer primary key and audit timestamps every table has.
How:   Declared with `mapped_column` so subclasses inherit fully-typed columns.
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, text
from sqlalchemy.orm import Mapped, mapped_column


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CoreColumns:
    """id / created_at / updated_at, shared by users, podcasts and episodes."""

    # Auto-increment integer ids: the first row of each table gets id 1
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )
