"""
Journal Backend — User SQLAlchemy Model
=======================================

What:  ORM model representing the `users` table.
Who:   Used by AuthService for sign-up and sign-in, and by Alembic for schema management.

Table Design Rationale:
    - userId: integer identity assigned by the database
    - username: unique, unbounded Text; the sign-in lookup key
    - hashedPassword: opaque salted hash, never returned by the API
    - createdAt: UTC with timezone, returned by sign-up

Physical column names are camel-case ("userId", "hashedPassword", ...) to
match the JSON contract; Python attributes stay snake_case.
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from journal.database import Base


class User(Base):
    """
    A journal account.

    Lifecycle:
        Created on sign-up, never mutated or deleted afterwards.
    """

    __tablename__ = "users"

    user_id: Mapped[int] = mapped_column(
        "userId",
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    username: Mapped[str] = mapped_column(
        "username",
        Text,
        nullable=False,
        unique=True,
    )

    hashed_password: Mapped[str] = mapped_column(
        "hashedPassword",
        Text,
        nullable=False,
    )

    # Python-side default so the value is available right after flush
    created_at: Mapped[datetime] = mapped_column(
        "createdAt",
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    def __repr__(self) -> str:
        return f"<User(user_id={self.user_id}, username='{self.username}')>"
