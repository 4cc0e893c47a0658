"""Translation of domain persistence errors into HTTP errors.

Routers catch domain exceptions from the service layer and raise the
HTTPException returned here. Not-found and provider errors are mapped in the
routers themselves because their status depends on the endpoint.
"""

from __future__ import annotations

from fastapi import HTTPException, status

from gifvote.domain.exceptions import PersistenceError, PersistenceTransientError


def persistence_http_error(exc: PersistenceError) -> HTTPException:
    """Return the HTTPException for a persistence failure.

    PersistenceTransientError → 503 (the client may retry)
    anything else             → 500
    """
    if isinstance(exc, PersistenceTransientError):
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database temporarily unavailable. Please retry.",
        )
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="An unexpected database error occurred.",
    )
