"""SQLAlchemy Core table definitions.

All table objects are registered against the shared ``metadata`` instance from
``gifvote.infra.db`` so that Alembic's autogenerate can discover them and the
repository layer can reference them for queries.

No ORM declarative mapping is used. Domain models (Pydantic) are hydrated
manually from query result rows inside the repository layer.

Tables:
    topic     - Seeded topic names (unique key: name)
    gif       - Cached Giphy GIFs (unique key: giphy_id)
    upvote    - One row per upvote event
    downvote  - One row per downvote event
"""

from __future__ import annotations

import sqlalchemy as sa

from gifvote.infra.db import metadata

# ---------------------------------------------------------------------------
# topic
# ---------------------------------------------------------------------------

topic_table: sa.Table = sa.Table(
    "topic",
    metadata,
    sa.Column("id", sa.INTEGER, primary_key=True, nullable=False),
    sa.Column("name", sa.VARCHAR(255), nullable=False),
    sa.UniqueConstraint("name", name="uq_topic_name"),
)

# ---------------------------------------------------------------------------
# gif
# ---------------------------------------------------------------------------

gif_table: sa.Table = sa.Table(
    "gif",
    metadata,
    sa.Column("id", sa.INTEGER, primary_key=True, autoincrement=True, nullable=False),
    sa.Column("giphy_id", sa.VARCHAR(64), nullable=False),
    sa.Column("url", sa.TEXT, nullable=False),
    sa.Column("embed_url", sa.TEXT, nullable=False),
    # Nullable: rows cached before topics existed carry no topic.
    sa.Column(
        "topic_id",
        sa.INTEGER,
        sa.ForeignKey("topic.id", name="fk_gif_topic_id"),
        nullable=True,
    ),
    sa.UniqueConstraint("giphy_id", name="uq_gif_giphy_id"),
)

# ---------------------------------------------------------------------------
# upvote / downvote
#
# No uniqueness on gif_id: every POST appends a row.
# ---------------------------------------------------------------------------

upvote_table: sa.Table = sa.Table(
    "upvote",
    metadata,
    sa.Column("id", sa.INTEGER, primary_key=True, autoincrement=True, nullable=False),
    sa.Column(
        "gif_id",
        sa.INTEGER,
        sa.ForeignKey("gif.id", name="fk_upvote_gif_id"),
        nullable=False,
        index=True,
    ),
)

downvote_table: sa.Table = sa.Table(
    "downvote",
    metadata,
    sa.Column("id", sa.INTEGER, primary_key=True, autoincrement=True, nullable=False),
    sa.Column(
        "gif_id",
        sa.INTEGER,
        sa.ForeignKey("gif.id", name="fk_downvote_gif_id"),
        nullable=False,
        index=True,
    ),
)
