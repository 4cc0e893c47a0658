"""Seed the topic fixtures.

Revision ID: 002
Revises: 001
Create Date: 2026-10-19

Adds:
    topic rows - the fixed set of topics offered by the front end.

Notes:
    - Topics are reference data; the API never creates or deletes them.
    - Ids are explicit so front-end links such as /gifs?topic=1 stay stable
      across fixture resets.
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

# Revision identifiers, used by Alembic.
revision: str = "002"
down_revision: str | None = "001"
branch_labels: str | None = None
depends_on: str | None = None

TOPICS: list[dict[str, object]] = [
    {"id": 1, "name": "cats"},
    {"id": 2, "name": "dogs"},
    {"id": 3, "name": "coffee"},
    {"id": 4, "name": "programming"},
    {"id": 5, "name": "reactions"},
]

_topic = sa.table(
    "topic",
    sa.column("id", sa.INTEGER),
    sa.column("name", sa.VARCHAR),
)


def upgrade() -> None:
    op.bulk_insert(_topic, TOPICS)


def downgrade() -> None:
    op.execute(_topic.delete().where(_topic.c.id.in_([t["id"] for t in TOPICS])))
