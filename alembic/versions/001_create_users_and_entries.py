"""Create users and entries tables

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates `users` and `entries`.
How:   Camel-case column names match the JSON contract; entries."userId"
       references users."userId" and is indexed for the per-user listing.

Rollback: downgrade() drops both tables (destructive — all data lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("userId", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("username", sa.Text(), nullable=False),
        sa.Column("hashedPassword", sa.Text(), nullable=False),
        sa.Column(
            "createdAt",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("userId"),
        sa.UniqueConstraint("username"),
    )

    op.create_table(
        "entries",
        sa.Column("entryId", sa.Integer(), autoincrement=True, nullable=False),
        # Nullable only for entries written while ownership scoping is off
        sa.Column("userId", sa.Integer(), nullable=True),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=False),
        sa.Column("photoUrl", sa.Text(), nullable=False),
        sa.ForeignKeyConstraint(["userId"], ["users.userId"]),
        sa.PrimaryKeyConstraint("entryId"),
    )

    op.create_index("idx_entries_user_id", "entries", ["userId"])


def downgrade() -> None:
    op.drop_index("idx_entries_user_id", table_name="entries")
    op.drop_table("entries")
    op.drop_table("users")
