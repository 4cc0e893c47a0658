"""Domain models.

Pure data layer - no infrastructure, no configuration, no I/O.
Every other layer imports from here; this module imports nothing internal.

Pydantic v2 is used for:
  - Field validation at construction time
  - Hydrating rows returned by the repository layer
  - Parsing the Giphy response into a typed record

All models are frozen (immutable). Rows are append-only, so nothing in the
application ever needs to mutate a loaded model.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class VoteKind(str, Enum):
    """Direction of a single vote event.

    Inherits from str so the value can be logged and compared without a
    custom encoder. Each member maps to its own table (``upvote`` or
    ``downvote``).
    """

    UPVOTE = "upvote"
    DOWNVOTE = "downvote"


# ---------------------------------------------------------------------------
# Topic
# ---------------------------------------------------------------------------


class Topic(BaseModel):
    """A named tag used to query Giphy and to group cached GIFs.

    Topics are seeded by migration and never created through the API.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    name: str = Field(min_length=1)


# ---------------------------------------------------------------------------
# GiphyGif
# ---------------------------------------------------------------------------


class GiphyGif(BaseModel):
    """A single GIF as returned by the Giphy random endpoint.

    Not yet persisted: it carries the external id only.
    """

    model_config = ConfigDict(frozen=True)

    giphy_id: str = Field(min_length=1, description="Giphy's identifier. Cache key.")
    url: str = Field(description="Canonical giphy.com page for the GIF.")
    embed_url: str = Field(description="Direct image URL suitable for <img src>.")


# ---------------------------------------------------------------------------
# Gif
# ---------------------------------------------------------------------------


class Gif(BaseModel):
    """A cached GIF row.

    `giphy_id` is the business key - all deduplication keys on it, not on
    `id`. `topic_id` is None for GIFs cached before topics existed; such rows
    never appear in the ranking.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    giphy_id: str
    url: str
    embed_url: str
    topic_id: Optional[int] = None


# ---------------------------------------------------------------------------
# RankedGif
# ---------------------------------------------------------------------------


class RankedGif(BaseModel):
    """One row of the top-GIFs ranking."""

    model_config = ConfigDict(frozen=True)

    id: int
    url: str
    embed_url: str
    topic: str = Field(description="Name of the topic the GIF was cached under.")
    net_votes: int = Field(gt=0, description="Upvotes minus downvotes. Always positive.")
