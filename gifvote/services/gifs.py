"""GIF service.

Orchestrates the repository and the Giphy client for each API operation:
    - Listing topics (list_topics)
    - Fetching and caching a random GIF for a topic (random_gif)
    - Recording an upvote or downvote (vote)
    - Ranking cached GIFs by net votes (top_gifs)

Each operation:
  - Binds a structlog logger with the service name and operation fields.
  - Maps SQLAlchemy errors to domain persistence exceptions so routers only
    ever handle domain types.
  - Lets provider errors (already domain types) and not-found errors
    propagate unchanged after logging them.

Error classification:
    IntegrityError   → PersistenceValidationError (constraint bug)
    everything else  → PersistenceTransientError  (locked database, I/O)
"""

from __future__ import annotations

import time
from typing import Optional

import sqlalchemy.exc
import structlog

from gifvote.config import constants
from gifvote.domain.exceptions import (
    GifNotFoundError,
    PersistenceTransientError,
    PersistenceValidationError,
    ProviderError,
    TopicNotFoundError,
)
from gifvote.domain.models import Gif, RankedGif, Topic, VoteKind
from gifvote.infra.giphy import GiphyClient
from gifvote.infra.repositories import GifRepository


def _classify_sqlalchemy_error(
    exc: sqlalchemy.exc.SQLAlchemyError,
) -> PersistenceTransientError | PersistenceValidationError:
    """Map a SQLAlchemy exception to a domain persistence exception.

    Classification:
        IntegrityError  → PersistenceValidationError (constraint bug)
        All others      → PersistenceTransientError (locked / I/O, retry is safe)
    """
    if isinstance(exc, sqlalchemy.exc.IntegrityError):
        return PersistenceValidationError(str(exc))
    return PersistenceTransientError(str(exc))


class GifService:
    """Application operations behind the HTTP routes.

    Holds no per-request state; one instance is shared by all requests.

    Args:
        repository: Data access for topics, gifs and votes.
        giphy:      Client for the Giphy random endpoint.
    """

    def __init__(self, repository: GifRepository, giphy: GiphyClient) -> None:
        self._repo = repository
        self._giphy = giphy

    async def list_topics(self) -> list[Topic]:
        """Return all topics."""
        log = structlog.get_logger().bind(service=constants.SERVICE_NAME)

        try:
            topics = await self._repo.list_topics()
        except sqlalchemy.exc.SQLAlchemyError as exc:
            log.error(
                "topics.list.db_error",
                error=str(exc),
                error_type=type(exc).__name__,
            )
            raise _classify_sqlalchemy_error(exc) from exc

        log.info("topics.list.completed", count=len(topics))
        return topics

    async def random_gif(self, topic_id: int) -> Gif:
        """Fetch a random GIF for a topic from Giphy and cache it.

        The topic is resolved first; an unknown topic fails before any
        provider call. If the returned GIF was cached before (same
        ``giphy_id``), the existing row and its local id are reused.

        Args:
            topic_id: Primary key of the topic whose name is used as the tag.

        Returns:
            The cached Gif.

        Raises:
            TopicNotFoundError: No topic with ``topic_id``.
            ProviderError:      Giphy lookup failed or found nothing.
            PersistenceTransientError / PersistenceValidationError: DB failure.
        """
        log = structlog.get_logger().bind(
            service=constants.SERVICE_NAME,
            topic_id=topic_id,
        )
        started_at = time.monotonic()

        try:
            topic = await self._repo.get_topic(topic_id)
        except sqlalchemy.exc.SQLAlchemyError as exc:
            log.error("gifs.random.db_error", error=str(exc), error_type=type(exc).__name__)
            raise _classify_sqlalchemy_error(exc) from exc

        if topic is None:
            log.warning("gifs.random.topic_not_found")
            raise TopicNotFoundError(topic_id)

        log = log.bind(topic=topic.name)

        try:
            record = await self._giphy.random_gif(topic.name)
        except ProviderError as exc:
            log.error(
                "gifs.random.provider_error",
                error=str(exc),
                error_type=type(exc).__name__,
            )
            raise

        log = log.bind(giphy_id=record.giphy_id)

        try:
            gif = await self._repo.get_gif_by_giphy_id(record.giphy_id)
            cache_hit = gif is not None
            if gif is None:
                gif = await self._repo.insert_gif(record, topic_id=topic.id)
        except PersistenceValidationError as exc:
            log.error("gifs.random.validation_error", error=str(exc), error_type=type(exc).__name__)
            raise
        except sqlalchemy.exc.SQLAlchemyError as exc:
            log.error("gifs.random.db_error", error=str(exc), error_type=type(exc).__name__)
            raise _classify_sqlalchemy_error(exc) from exc

        duration_ms = int((time.monotonic() - started_at) * 1000)
        log.info(
            "gifs.random.cache_hit" if cache_hit else "gifs.random.cached",
            gif_id=gif.id,
            duration_ms=duration_ms,
        )
        return gif

    async def vote(self, gif_id: int, kind: VoteKind) -> int:
        """Record one vote for a cached GIF.

        Args:
            gif_id: Local id of the GIF.
            kind:   Upvote or downvote.

        Returns:
            ``gif_id``, echoed back for the response body.

        Raises:
            GifNotFoundError: No gif with ``gif_id``; nothing is written.
            PersistenceTransientError / PersistenceValidationError: DB failure.
        """
        log = structlog.get_logger().bind(
            service=constants.SERVICE_NAME,
            gif_id=gif_id,
            kind=kind.value,
        )

        try:
            exists = await self._repo.gif_exists(gif_id)
            if not exists:
                log.warning("votes.record.not_found")
                raise GifNotFoundError(gif_id)
            vote_id = await self._repo.insert_vote(gif_id, kind)
        except sqlalchemy.exc.SQLAlchemyError as exc:
            log.error("votes.record.db_error", error=str(exc), error_type=type(exc).__name__)
            raise _classify_sqlalchemy_error(exc) from exc

        log.info("votes.record.completed", vote_id=vote_id)
        return gif_id

    async def top_gifs(self, topic: Optional[str] = None) -> list[RankedGif]:
        """Return up to TOP_GIFS_LIMIT GIFs with positive net votes, best first.

        Args:
            topic: Optional topic-name filter (case-insensitive substring).
        """
        log = structlog.get_logger().bind(
            service=constants.SERVICE_NAME,
            topic_filter=topic,
        )

        try:
            ranked = await self._repo.rank_gifs(topic=topic, limit=constants.TOP_GIFS_LIMIT)
        except sqlalchemy.exc.SQLAlchemyError as exc:
            log.error("gifs.top.db_error", error=str(exc), error_type=type(exc).__name__)
            raise _classify_sqlalchemy_error(exc) from exc

        log.info("gifs.top.completed", count=len(ranked))
        return ranked
