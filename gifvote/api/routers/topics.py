"""Topics query endpoint.

Exposes:
    GET /topics - Return every topic.
"""

from __future__ import annotations

from fastapi import APIRouter, status

from gifvote.api.dependencies import GifServiceDep
from gifvote.api.errors import persistence_http_error
from gifvote.api.models import TopicResponse
from gifvote.domain.exceptions import PersistenceError

router = APIRouter(prefix="/topics", tags=["topics"])


@router.get(
    "",
    response_model=list[TopicResponse],
    status_code=status.HTTP_200_OK,
    summary="List topics",
    description="Returns every topic, ordered by id. Topics are fixed reference data.",
)
async def list_topics(service: GifServiceDep) -> list[TopicResponse]:
    try:
        topics = await service.list_topics()
    except PersistenceError as exc:
        raise persistence_http_error(exc) from exc

    return [TopicResponse.from_domain(t) for t in topics]
