"""Unit tests for gifvote.domain.models - Topic, Gif, GiphyGif, RankedGif, VoteKind.

Coverage targets
----------------
- VoteKind: values, str subclass, construction from string
- Topic / GiphyGif: required non-empty fields
- Gif: optional topic_id, frozen immutability
- RankedGif: net_votes must be positive
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from gifvote.domain.models import Gif, GiphyGif, RankedGif, Topic, VoteKind


class TestVoteKind:
    def test_values(self) -> None:
        assert VoteKind.UPVOTE == "upvote"
        assert VoteKind.DOWNVOTE == "downvote"

    def test_is_str_subclass(self) -> None:
        for kind in VoteKind:
            assert isinstance(kind, str)

    def test_construction_from_string(self) -> None:
        assert VoteKind("upvote") is VoteKind.UPVOTE

    def test_invalid_string_raises_value_error(self) -> None:
        with pytest.raises(ValueError):
            VoteKind("sidevote")


class TestTopic:
    def test_create(self) -> None:
        topic = Topic(id=1, name="cats")
        assert topic.id == 1
        assert topic.name == "cats"

    def test_empty_name_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Topic(id=1, name="")


class TestGiphyGif:
    def test_create(self) -> None:
        gif = GiphyGif(giphy_id="abc", url="https://giphy.com/gifs/abc", embed_url="https://i.giphy.com/abc.gif")
        assert gif.giphy_id == "abc"

    def test_missing_giphy_id_rejected(self) -> None:
        with pytest.raises(ValidationError):
            GiphyGif(giphy_id=None, url="u", embed_url="e")  # type: ignore[arg-type]

    def test_empty_giphy_id_rejected(self) -> None:
        with pytest.raises(ValidationError):
            GiphyGif(giphy_id="", url="u", embed_url="e")


class TestGif:
    def test_topic_id_defaults_to_none(self) -> None:
        gif = Gif(id=1, giphy_id="abc", url="u", embed_url="e")
        assert gif.topic_id is None

    def test_frozen(self) -> None:
        gif = Gif(id=1, giphy_id="abc", url="u", embed_url="e", topic_id=2)
        with pytest.raises(ValidationError):
            gif.topic_id = 3  # type: ignore[misc]


class TestRankedGif:
    def test_positive_net_votes_accepted(self) -> None:
        ranked = RankedGif(id=1, url="u", embed_url="e", topic="cats", net_votes=2)
        assert ranked.net_votes == 2

    @pytest.mark.parametrize("net_votes", [0, -1])
    def test_non_positive_net_votes_rejected(self, net_votes: int) -> None:
        with pytest.raises(ValidationError):
            RankedGif(id=1, url="u", embed_url="e", topic="cats", net_votes=net_votes)
