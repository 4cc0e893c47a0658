"""Initial schema: topic, gif, upvote and downvote tables.

Revision ID: 001
Revises:
Create Date: 2026-10-19

Creates:
    topic     - Topic names used as Giphy tags.
    gif       - Cached Giphy GIFs.
    upvote    - One row per upvote.
    downvote  - One row per downvote.

Notes:
    - gif.giphy_id is unique so concurrent caching of the same GIF cannot
      produce two rows.
    - Unique constraints and foreign keys are named explicitly so batch
      operations on SQLite can address them later.
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

# Revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | None = None
depends_on: str | None = None


def upgrade() -> None:
    # ------------------------------------------------------------------
    # topic
    # ------------------------------------------------------------------
    op.create_table(
        "topic",
        sa.Column("id", sa.INTEGER, primary_key=True, nullable=False),
        sa.Column("name", sa.VARCHAR(255), nullable=False),
        sa.UniqueConstraint("name", name="uq_topic_name"),
    )

    # ------------------------------------------------------------------
    # gif
    # ------------------------------------------------------------------
    op.create_table(
        "gif",
        sa.Column("id", sa.INTEGER, primary_key=True, autoincrement=True, nullable=False),
        sa.Column("giphy_id", sa.VARCHAR(64), nullable=False),
        sa.Column("url", sa.TEXT, nullable=False),
        sa.Column("embed_url", sa.TEXT, nullable=False),
        sa.Column(
            "topic_id",
            sa.INTEGER,
            sa.ForeignKey("topic.id", name="fk_gif_topic_id"),
            nullable=True,
        ),
        sa.UniqueConstraint("giphy_id", name="uq_gif_giphy_id"),
    )

    # ------------------------------------------------------------------
    # upvote / downvote
    # ------------------------------------------------------------------
    for table_name in ("upvote", "downvote"):
        op.create_table(
            table_name,
            sa.Column("id", sa.INTEGER, primary_key=True, autoincrement=True, nullable=False),
            sa.Column(
                "gif_id",
                sa.INTEGER,
                sa.ForeignKey("gif.id", name=f"fk_{table_name}_gif_id"),
                nullable=False,
            ),
        )
        op.create_index(f"ix_{table_name}_gif_id", table_name, ["gif_id"])


def downgrade() -> None:
    for table_name in ("downvote", "upvote"):
        op.drop_index(f"ix_{table_name}_gif_id", table_name=table_name)
        op.drop_table(table_name)
    op.drop_table("gif")
    op.drop_table("topic")
