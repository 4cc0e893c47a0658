"""GIF endpoints.

Exposes:
    GET  /gifs                   - Fetch a random GIF for a topic and cache it.
    GET  /gifs/top               - GIFs with positive net votes, best first.
    POST /gifs/{gif_id}/upvotes   - Record an upvote.
    POST /gifs/{gif_id}/downvotes - Record a downvote.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, HTTPException, Path, Query, status

from gifvote.api.dependencies import GifServiceDep
from gifvote.api.errors import persistence_http_error
from gifvote.api.models import GifResponse, RankedGifResponse, VoteResponse
from gifvote.config import constants
from gifvote.domain.exceptions import (
    GifNotFoundError,
    PersistenceError,
    ProviderError,
    ProviderNoMatchError,
    TopicNotFoundError,
)
from gifvote.domain.models import VoteKind
from gifvote.services import GifService

router = APIRouter(prefix="/gifs", tags=["gifs"])


@router.get(
    "",
    response_model=GifResponse,
    status_code=status.HTTP_200_OK,
    summary="Get a random GIF for a topic",
    description=(
        "Asks Giphy for a random GIF tagged with the topic's name and caches it. "
        "A GIF Giphy has returned before keeps its original id."
    ),
)
async def random_gif(
    service: GifServiceDep,
    topic: int = Query(description="Topic id, as returned by GET /topics."),
) -> GifResponse:
    """Return a random GIF for ``topic``.

    Raises:
        HTTPException 404: Unknown topic id, or Giphy has no GIF for it.
        HTTPException 502: Giphy unreachable or returned an unusable response.
        HTTPException 503: Transient database error.
        HTTPException 500: Unexpected database error.
    """
    try:
        gif = await service.random_gif(topic)
    except TopicNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No topic found with id {topic}.",
        ) from exc
    except ProviderNoMatchError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Giphy has no GIF for topic '{exc.tag}'.",
        ) from exc
    except ProviderError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Giphy request failed.",
        ) from exc
    except PersistenceError as exc:
        raise persistence_http_error(exc) from exc

    return GifResponse.from_domain(gif)


@router.get(
    "/top",
    response_model=list[RankedGifResponse],
    status_code=status.HTTP_200_OK,
    summary="List top-voted GIFs",
    description=(
        f"Returns at most {constants.TOP_GIFS_LIMIT} cached GIFs whose upvotes outnumber "
        "their downvotes, ordered by net votes descending. `topic` restricts the "
        "ranking to topics whose name contains the given text."
    ),
)
async def top_gifs(
    service: GifServiceDep,
    topic: Optional[str] = Query(default=None, description="Topic name filter."),
) -> list[RankedGifResponse]:
    try:
        ranked = await service.top_gifs(topic)
    except PersistenceError as exc:
        raise persistence_http_error(exc) from exc

    return [RankedGifResponse.from_domain(r) for r in ranked]


async def _record_vote(service: GifService, gif_id: int, kind: VoteKind) -> VoteResponse:
    """Record a vote, mapping domain errors to HTTP errors."""
    try:
        voted_id = await service.vote(gif_id, kind)
    except GifNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No gif found with id {gif_id}.",
        ) from exc
    except PersistenceError as exc:
        raise persistence_http_error(exc) from exc

    return VoteResponse(id=voted_id)


@router.post(
    "/{gif_id}/upvotes",
    response_model=VoteResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upvote a GIF",
)
async def upvote(
    service: GifServiceDep,
    gif_id: int = Path(description="Local gif id."),
) -> VoteResponse:
    return await _record_vote(service, gif_id, VoteKind.UPVOTE)


@router.post(
    "/{gif_id}/downvotes",
    response_model=VoteResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Downvote a GIF",
)
async def downvote(
    service: GifServiceDep,
    gif_id: int = Path(description="Local gif id."),
) -> VoteResponse:
    return await _record_vote(service, gif_id, VoteKind.DOWNVOTE)
