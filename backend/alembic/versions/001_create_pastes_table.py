"""Create pastes table

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates the `pastes` table: one row per paste, soft-deleted, never removed.
How:   Portable column types (works on PostgreSQL and SQLite).

Rollback: downgrade() drops the table entirely (destructive: all data lost).
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
    """Create the pastes table and its created_at index."""
    op.create_table(
        "pastes",
        sa.Column("id", sa.String(16), nullable=False, comment="Short opaque identifier (hex)"),
        sa.Column("content", sa.Text(), nullable=False, comment="Full paste text"),
        sa.Column(
            "language",
            sa.String(32),
            nullable=False,
            server_default=sa.text("'plain'"),
            comment="Syntax tag, e.g. plain, python, json",
        ),
        sa.Column(
            "expires_at",
            sa.DateTime(timezone=True),
            nullable=True,
            comment="Unreadable once now >= expires_at; NULL = never expires",
        ),
        sa.Column("burn_after_read", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_private", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("views", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.Column(
            "deleted",
            sa.Boolean(),
            nullable=False,
            server_default=sa.false(),
            comment="Soft-delete marker; deleted rows are excluded from reads and listings",
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    # Serves the listing query: ORDER BY created_at DESC LIMIT 100
    op.create_index(
        "idx_pastes_created_at",
        "pastes",
        [sa.text("created_at DESC")],
    )


def downgrade() -> None:
    op.drop_index("idx_pastes_created_at", table_name="pastes")
    op.drop_table("pastes")
