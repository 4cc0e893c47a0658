"""Unit tests for gifvote.services.gifs - GifService.

Coverage targets
----------------
- _classify_sqlalchemy_error:
    IntegrityError → PersistenceValidationError
    OperationalError / generic SQLAlchemyError → PersistenceTransientError

- random_gif:
    Unknown topic → TopicNotFoundError, provider never called
    Cache miss → insert_gif with the topic id
    Cache hit → existing row reused, insert_gif never called
    Provider errors propagate unchanged
    SQLAlchemy errors → domain persistence errors

- vote:
    Unknown gif → GifNotFoundError, insert_vote never called
    Known gif → one insert_vote call, gif id echoed
    SQLAlchemy errors → domain persistence errors

- top_gifs / list_topics:
    Pass-through with the configured limit
    SQLAlchemy errors → domain persistence errors

Design decisions
----------------
- Repository and Giphy client are AsyncMock(spec=...) so that a misspelled
  method name fails the test instead of silently returning a mock.
"""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
import sqlalchemy.exc

from gifvote.config import constants
from gifvote.domain.exceptions import (
    GifNotFoundError,
    PersistenceTransientError,
    PersistenceValidationError,
    ProviderNoMatchError,
    ProviderUnavailableError,
    TopicNotFoundError,
)
from gifvote.domain.models import Gif, GiphyGif, RankedGif, Topic, VoteKind
from gifvote.infra.giphy import GiphyClient
from gifvote.infra.repositories import GifRepository
from gifvote.services.gifs import GifService, _classify_sqlalchemy_error


# ---------------------------------------------------------------------------
# Test helpers / factories
# ---------------------------------------------------------------------------


def _record(giphy_id: str = "abc") -> GiphyGif:
    return GiphyGif(giphy_id=giphy_id, url=f"https://giphy.com/gifs/{giphy_id}", embed_url=f"https://i/{giphy_id}.gif")


def _gif(gif_id: int = 1, giphy_id: str = "abc", topic_id: int | None = 1) -> Gif:
    return Gif(
        id=gif_id,
        giphy_id=giphy_id,
        url=f"https://giphy.com/gifs/{giphy_id}",
        embed_url=f"https://i/{giphy_id}.gif",
        topic_id=topic_id,
    )


def _operational_error() -> sqlalchemy.exc.OperationalError:
    return sqlalchemy.exc.OperationalError("stmt", {}, Exception("database is locked"))


@pytest.fixture()
def repo() -> AsyncMock:
    return AsyncMock(spec=GifRepository)


@pytest.fixture()
def giphy() -> AsyncMock:
    return AsyncMock(spec=GiphyClient)


@pytest.fixture()
def service(repo: AsyncMock, giphy: AsyncMock) -> GifService:
    return GifService(repository=repo, giphy=giphy)


# ---------------------------------------------------------------------------
# TestClassifySQLAlchemyError
# ---------------------------------------------------------------------------


class TestClassifySQLAlchemyError:
    def test_integrity_error_maps_to_validation_error(self) -> None:
        exc = sqlalchemy.exc.IntegrityError("stmt", {}, Exception("UNIQUE constraint failed"))
        assert isinstance(_classify_sqlalchemy_error(exc), PersistenceValidationError)

    def test_operational_error_maps_to_transient_error(self) -> None:
        assert isinstance(_classify_sqlalchemy_error(_operational_error()), PersistenceTransientError)

    def test_generic_error_maps_to_transient_error(self) -> None:
        exc = sqlalchemy.exc.SQLAlchemyError("something odd")
        assert isinstance(_classify_sqlalchemy_error(exc), PersistenceTransientError)

    def test_message_propagated(self) -> None:
        exc = _operational_error()
        assert str(exc) in str(_classify_sqlalchemy_error(exc))


# ---------------------------------------------------------------------------
# TestRandomGif
# ---------------------------------------------------------------------------


class TestRandomGif:
    @pytest.mark.asyncio
    async def test_unknown_topic_skips_provider(
        self, service: GifService, repo: AsyncMock, giphy: AsyncMock
    ) -> None:
        repo.get_topic.return_value = None

        with pytest.raises(TopicNotFoundError):
            await service.random_gif(99)

        giphy.random_gif.assert_not_called()
        repo.insert_gif.assert_not_called()

    @pytest.mark.asyncio
    async def test_cache_miss_inserts_with_topic(
        self, service: GifService, repo: AsyncMock, giphy: AsyncMock
    ) -> None:
        repo.get_topic.return_value = Topic(id=1, name="cats")
        giphy.random_gif.return_value = _record("abc")
        repo.get_gif_by_giphy_id.return_value = None
        repo.insert_gif.return_value = _gif(7, "abc")

        gif = await service.random_gif(1)

        assert gif.id == 7
        giphy.random_gif.assert_awaited_once_with("cats")
        repo.insert_gif.assert_awaited_once_with(_record("abc"), topic_id=1)

    @pytest.mark.asyncio
    async def test_cache_hit_reuses_existing_row(
        self, service: GifService, repo: AsyncMock, giphy: AsyncMock
    ) -> None:
        repo.get_topic.return_value = Topic(id=1, name="cats")
        giphy.random_gif.return_value = _record("abc")
        repo.get_gif_by_giphy_id.return_value = _gif(3, "abc")

        gif = await service.random_gif(1)

        assert gif.id == 3
        repo.insert_gif.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [ProviderNoMatchError("cats"), ProviderUnavailableError("timeout")],
    )
    async def test_provider_errors_propagate(
        self, service: GifService, repo: AsyncMock, giphy: AsyncMock, error: Exception
    ) -> None:
        repo.get_topic.return_value = Topic(id=1, name="cats")
        giphy.random_gif.side_effect = error

        with pytest.raises(type(error)):
            await service.random_gif(1)

        repo.insert_gif.assert_not_called()

    @pytest.mark.asyncio
    async def test_db_error_on_topic_lookup_is_classified(
        self, service: GifService, repo: AsyncMock, giphy: AsyncMock
    ) -> None:
        repo.get_topic.side_effect = _operational_error()

        with pytest.raises(PersistenceTransientError):
            await service.random_gif(1)

        giphy.random_gif.assert_not_called()

    @pytest.mark.asyncio
    async def test_integrity_error_on_insert_is_validation_error(
        self, service: GifService, repo: AsyncMock, giphy: AsyncMock
    ) -> None:
        repo.get_topic.return_value = Topic(id=1, name="cats")
        giphy.random_gif.return_value = _record("abc")
        repo.get_gif_by_giphy_id.return_value = None
        repo.insert_gif.side_effect = sqlalchemy.exc.IntegrityError("stmt", {}, Exception("NOT NULL"))

        with pytest.raises(PersistenceValidationError):
            await service.random_gif(1)

    @pytest.mark.asyncio
    async def test_validation_error_from_repository_propagates(
        self, service: GifService, repo: AsyncMock, giphy: AsyncMock
    ) -> None:
        repo.get_topic.return_value = Topic(id=1, name="cats")
        giphy.random_gif.return_value = _record("abc")
        repo.get_gif_by_giphy_id.return_value = None
        repo.insert_gif.side_effect = PersistenceValidationError("gif missing after insert")

        with pytest.raises(PersistenceValidationError, match="missing after insert"):
            await service.random_gif(1)


# ---------------------------------------------------------------------------
# TestVote
# ---------------------------------------------------------------------------


class TestVote:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("kind", list(VoteKind))
    async def test_unknown_gif_writes_nothing(
        self, service: GifService, repo: AsyncMock, kind: VoteKind
    ) -> None:
        repo.gif_exists.return_value = False

        with pytest.raises(GifNotFoundError):
            await service.vote(5, kind)

        repo.insert_vote.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("kind", list(VoteKind))
    async def test_known_gif_records_one_vote(
        self, service: GifService, repo: AsyncMock, kind: VoteKind
    ) -> None:
        repo.gif_exists.return_value = True
        repo.insert_vote.return_value = 11

        result = await service.vote(5, kind)

        assert result == 5
        repo.insert_vote.assert_awaited_once_with(5, kind)

    @pytest.mark.asyncio
    async def test_db_error_is_classified(self, service: GifService, repo: AsyncMock) -> None:
        repo.gif_exists.return_value = True
        repo.insert_vote.side_effect = _operational_error()

        with pytest.raises(PersistenceTransientError):
            await service.vote(5, VoteKind.UPVOTE)


# ---------------------------------------------------------------------------
# TestTopGifs / TestListTopics
# ---------------------------------------------------------------------------


class TestTopGifs:
    @pytest.mark.asyncio
    async def test_uses_configured_limit(self, service: GifService, repo: AsyncMock) -> None:
        ranked = [RankedGif(id=1, url="u", embed_url="e", topic="cats", net_votes=2)]
        repo.rank_gifs.return_value = ranked

        result = await service.top_gifs("cats")

        assert result == ranked
        repo.rank_gifs.assert_awaited_once_with(topic="cats", limit=constants.TOP_GIFS_LIMIT)

    @pytest.mark.asyncio
    async def test_db_error_is_classified(self, service: GifService, repo: AsyncMock) -> None:
        repo.rank_gifs.side_effect = _operational_error()

        with pytest.raises(PersistenceTransientError):
            await service.top_gifs()


class TestListTopics:
    @pytest.mark.asyncio
    async def test_returns_repository_topics(self, service: GifService, repo: AsyncMock) -> None:
        repo.list_topics.return_value = [Topic(id=1, name="cats")]

        assert await service.list_topics() == [Topic(id=1, name="cats")]

    @pytest.mark.asyncio
    async def test_db_error_is_classified(self, service: GifService, repo: AsyncMock) -> None:
        repo.list_topics.side_effect = sqlalchemy.exc.IntegrityError("stmt", {}, Exception("x"))

        with pytest.raises(PersistenceValidationError):
            await service.list_topics()
