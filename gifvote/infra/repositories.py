"""Database repository layer.

The repository provides typed, async methods for reading and writing domain
models to SQLite via SQLAlchemy Core. It does not log and does not contain
business logic - it is a pure data access object.

Responsibilities:
  - Construct and execute SQL statements.
  - Map result rows to domain model instances.
  - Let SQLAlchemy exceptions propagate to callers (services) which then
    classify them as PersistenceTransientError or PersistenceValidationError.

What the repository does NOT do:
  - It does not catch exceptions.
  - It does not log.
  - It does not own transactions across calls (each method is one atomic
    transaction via get_connection(), which uses engine.begin()).

Classes:
    GifRepository - list_topics(), get_topic(), get_gif_by_giphy_id(),
                    insert_gif(), gif_exists(), insert_vote(), count_votes(),
                    rank_gifs()
"""

from __future__ import annotations

from typing import Optional

import sqlalchemy as sa
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncEngine

from gifvote.domain.exceptions import PersistenceValidationError
from gifvote.domain.models import Gif, GiphyGif, RankedGif, Topic, VoteKind
from gifvote.infra.db import get_connection
from gifvote.infra.tables import downvote_table, gif_table, topic_table, upvote_table

_VOTE_TABLES: dict[VoteKind, sa.Table] = {
    VoteKind.UPVOTE: upvote_table,
    VoteKind.DOWNVOTE: downvote_table,
}

# SQLite INTEGER is a signed 64-bit value; the driver refuses anything wider.
_SQLITE_INT_MIN = -(2**63)
_SQLITE_INT_MAX = 2**63 - 1


def _fits_sqlite_int(value: int) -> bool:
    return _SQLITE_INT_MIN <= value <= _SQLITE_INT_MAX


def _row_to_topic(row: sa.engine.Row) -> Topic:  # type: ignore[type-arg]
    """Map a SQLAlchemy result row to a Topic domain model."""
    return Topic(id=row.id, name=row.name)


def _row_to_gif(row: sa.engine.Row) -> Gif:  # type: ignore[type-arg]
    """Map a SQLAlchemy result row to a Gif domain model."""
    return Gif(
        id=row.id,
        giphy_id=row.giphy_id,
        url=row.url,
        embed_url=row.embed_url,
        topic_id=row.topic_id,
    )


def _row_to_ranked_gif(row: sa.engine.Row) -> RankedGif:  # type: ignore[type-arg]
    """Map a ranking result row to a RankedGif domain model."""
    return RankedGif(
        id=row.id,
        url=row.url,
        embed_url=row.embed_url,
        topic=row.topic,
        net_votes=row.net_votes,
    )


def _vote_counts(table: sa.Table, label: str) -> sa.Subquery:
    """Return ``SELECT gif_id, count(*) AS <label> FROM <table> GROUP BY gif_id``.

    Counting each vote table on its own keeps one side's row fan-out from
    multiplying the other side's count.
    """
    return (
        sa.select(table.c.gif_id, sa.func.count().label(label))
        .group_by(table.c.gif_id)
        .subquery()
    )


class GifRepository:
    """Data access layer for the ``topic``, ``gif``, ``upvote`` and ``downvote`` tables.

    Args:
        engine: Async engine created once at application startup.
    """

    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine

    # ------------------------------------------------------------------
    # Topics
    # ------------------------------------------------------------------

    async def list_topics(self) -> list[Topic]:
        """Return every topic ordered by id ascending."""
        stmt = sa.select(topic_table).order_by(topic_table.c.id.asc())

        async with get_connection(self._engine) as conn:
            result = await conn.execute(stmt)

        return [_row_to_topic(row) for row in result.fetchall()]

    async def get_topic(self, topic_id: int) -> Optional[Topic]:
        """Return the topic with primary key ``topic_id``, or None.

        An id outside the SQLite integer range cannot match a row.
        """
        if not _fits_sqlite_int(topic_id):
            return None

        stmt = sa.select(topic_table).where(topic_table.c.id == topic_id)

        async with get_connection(self._engine) as conn:
            result = await conn.execute(stmt)

        row = result.fetchone()
        return _row_to_topic(row) if row is not None else None

    # ------------------------------------------------------------------
    # Gifs
    # ------------------------------------------------------------------

    async def get_gif_by_giphy_id(self, giphy_id: str) -> Optional[Gif]:
        """Return the cached gif for an external Giphy id, or None."""
        stmt = sa.select(gif_table).where(gif_table.c.giphy_id == giphy_id)

        async with get_connection(self._engine) as conn:
            result = await conn.execute(stmt)

        row = result.fetchone()
        return _row_to_gif(row) if row is not None else None

    async def insert_gif(self, record: GiphyGif, topic_id: Optional[int] = None) -> Gif:
        """Cache a Giphy record, keyed on ``giphy_id``.

        Idempotent: if a row with the same ``giphy_id`` already exists (a
        concurrent request cached it first), the existing row is returned
        unchanged and ``topic_id`` is ignored.

        Args:
            record:   GIF returned by the provider.
            topic_id: Topic the GIF was fetched for.

        Returns:
            The stored Gif, whether inserted by this call or pre-existing.

        Raises:
            PersistenceValidationError: If the row is missing after the insert.
            sqlalchemy.exc.SQLAlchemyError: Propagated to caller.
        """
        insert_stmt = (
            sqlite_insert(gif_table)
            .values(
                giphy_id=record.giphy_id,
                url=record.url,
                embed_url=record.embed_url,
                topic_id=topic_id,
            )
            .on_conflict_do_nothing(index_elements=[gif_table.c.giphy_id])
        )
        select_stmt = sa.select(gif_table).where(gif_table.c.giphy_id == record.giphy_id)

        # Both statements share one transaction so the select sees the row
        # whichever writer won.
        async with get_connection(self._engine) as conn:
            await conn.execute(insert_stmt)
            result = await conn.execute(select_stmt)

        row = result.fetchone()
        if row is None:
            raise PersistenceValidationError(
                f"gif missing after insert: giphy_id={record.giphy_id}"
            )
        return _row_to_gif(row)

    async def gif_exists(self, gif_id: int) -> bool:
        """Return True if a gif with primary key ``gif_id`` exists."""
        if not _fits_sqlite_int(gif_id):
            return False

        stmt = sa.select(gif_table.c.id).where(gif_table.c.id == gif_id)

        async with get_connection(self._engine) as conn:
            result = await conn.execute(stmt)

        return result.fetchone() is not None

    # ------------------------------------------------------------------
    # Votes
    # ------------------------------------------------------------------

    async def insert_vote(self, gif_id: int, kind: VoteKind) -> int:
        """Append one vote row for ``gif_id``.

        Does not check that the gif exists; callers do that first.

        Returns:
            Primary key of the new vote row.

        Raises:
            sqlalchemy.exc.SQLAlchemyError: Propagated to caller.
        """
        table = _VOTE_TABLES[kind]
        stmt = sa.insert(table).values(gif_id=gif_id)

        async with get_connection(self._engine) as conn:
            result = await conn.execute(stmt)

        return result.inserted_primary_key[0]

    async def count_votes(self, gif_id: int, kind: VoteKind) -> int:
        """Return the number of ``kind`` votes recorded for ``gif_id``."""
        if not _fits_sqlite_int(gif_id):
            return 0

        table = _VOTE_TABLES[kind]
        stmt = sa.select(sa.func.count()).select_from(table).where(table.c.gif_id == gif_id)

        async with get_connection(self._engine) as conn:
            result = await conn.execute(stmt)

        return result.scalar_one()

    # ------------------------------------------------------------------
    # Ranking
    # ------------------------------------------------------------------

    async def rank_gifs(self, topic: Optional[str] = None, limit: int = 20) -> list[RankedGif]:
        """Return GIFs with a positive net score, best first.

        Upvotes and downvotes are pre-aggregated per gif in separate
        subqueries and left-joined, so a gif with no votes on one side counts
        zero there. GIFs without a topic are excluded by the inner join.

        Args:
            topic: If provided, only GIFs whose topic name contains this
                   string (case-insensitive, LIKE wildcards escaped).
            limit: Maximum number of rows to return.

        Returns:
            RankedGif list ordered by net_votes descending, then id ascending.

        Raises:
            sqlalchemy.exc.SQLAlchemyError: Propagated to caller.
        """
        upvotes = _vote_counts(upvote_table, "upvotes")
        downvotes = _vote_counts(downvote_table, "downvotes")

        net_votes = sa.func.coalesce(upvotes.c.upvotes, 0) - sa.func.coalesce(
            downvotes.c.downvotes, 0
        )

        stmt = (
            sa.select(
                gif_table.c.id,
                gif_table.c.url,
                gif_table.c.embed_url,
                topic_table.c.name.label("topic"),
                net_votes.label("net_votes"),
            )
            .select_from(
                gif_table.join(topic_table, gif_table.c.topic_id == topic_table.c.id)
                .outerjoin(upvotes, upvotes.c.gif_id == gif_table.c.id)
                .outerjoin(downvotes, downvotes.c.gif_id == gif_table.c.id)
            )
            .where(net_votes > 0)
            .order_by(net_votes.desc(), gif_table.c.id.asc())
        )

        if topic is not None:
            stmt = stmt.where(topic_table.c.name.icontains(topic, autoescape=True))

        stmt = stmt.limit(limit)

        async with get_connection(self._engine) as conn:
            result = await conn.execute(stmt)

        return [_row_to_ranked_gif(row) for row in result.fetchall()]
