"""API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
These models are separate from domain models to maintain clean architecture:

    - Domain models (gifvote.domain.models) represent business entities
    - API models (this module) represent HTTP contracts

The front end expects camelCase keys (``embedUrl``, ``netVotes``). Fields are
declared in snake_case with a camelCase alias; FastAPI serialises responses
by alias.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from gifvote.domain.models import Gif, RankedGif, Topic


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# ---------------------------------------------------------------------------
# GET /topics
# ---------------------------------------------------------------------------


class TopicResponse(_CamelModel):
    """A single topic in GET /topics."""

    id: int
    name: str

    @classmethod
    def from_domain(cls, topic: Topic) -> "TopicResponse":
        return cls(id=topic.id, name=topic.name)


# ---------------------------------------------------------------------------
# GET /gifs
# ---------------------------------------------------------------------------


class GifResponse(_CamelModel):
    """Response body for GET /gifs: the cached GIF for a topic."""

    id: int = Field(description="Local gif id. Use it to vote.")
    url: str = Field(description="Canonical giphy.com page.")
    embed_url: str = Field(alias="embedUrl", description="Direct image URL.")

    @classmethod
    def from_domain(cls, gif: Gif) -> "GifResponse":
        return cls(id=gif.id, url=gif.url, embed_url=gif.embed_url)


# ---------------------------------------------------------------------------
# GET /gifs/top
# ---------------------------------------------------------------------------


class RankedGifResponse(_CamelModel):
    """A single row of GET /gifs/top."""

    id: int
    url: str
    embed_url: str = Field(alias="embedUrl")
    topic: str = Field(description="Topic name the GIF was cached under.")
    net_votes: int = Field(alias="netVotes", description="Upvotes minus downvotes.")

    @classmethod
    def from_domain(cls, ranked: RankedGif) -> "RankedGifResponse":
        return cls(
            id=ranked.id,
            url=ranked.url,
            embed_url=ranked.embed_url,
            topic=ranked.topic,
            net_votes=ranked.net_votes,
        )


# ---------------------------------------------------------------------------
# POST /gifs/{id}/upvotes, POST /gifs/{id}/downvotes
# ---------------------------------------------------------------------------


class VoteResponse(_CamelModel):
    """Response body for a recorded vote. Echoes the gif id."""

    id: int
