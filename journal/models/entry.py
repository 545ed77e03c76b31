"""
Journal Backend — Entry SQLAlchemy Model
========================================

What:  ORM model representing the `entries` table.
Who:   Used by EntryService for CRUD operations and by Alembic for schema management.

Table Design Rationale:
    - entryId: integer identity assigned by the database; immutable
    - userId: owner (FK → users). Nullable only so the unscoped mode can
      store entries that belong to nobody; the scoped mode always sets it.
    - title / notes / photoUrl: free text; photoUrl is an opaque client string

Query Patterns:
    - List:   WHERE "userId" = :uid ORDER BY "entryId"     → idx_entries_user_id
    - Single: WHERE "entryId" = :eid AND "userId" = :uid    → primary key
"""

from typing import Optional

from sqlalchemy import ForeignKey, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from journal.database import Base


class Entry(Base):
    """A single journal entry."""

    __tablename__ = "entries"

    entry_id: Mapped[int] = mapped_column(
        "entryId",
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    user_id: Mapped[Optional[int]] = mapped_column(
        "userId",
        Integer,
        ForeignKey("users.userId"),
        nullable=True,
    )

    title: Mapped[str] = mapped_column("title", Text, nullable=False)
    notes: Mapped[str] = mapped_column("notes", Text, nullable=False)
    photo_url: Mapped[str] = mapped_column("photoUrl", Text, nullable=False)

    __table_args__ = (
        Index("idx_entries_user_id", user_id),
    )

    def __repr__(self) -> str:
        return f"<Entry(entry_id={self.entry_id}, user_id={self.user_id}, title='{self.title}')>"
