"""Domain exceptions.

All application exceptions are domain-level. Infrastructure errors (httpx
transport failures, malformed Giphy payloads, DB driver errors) are caught at
the service or client boundary and re-raised as the appropriate domain
exception here. Routers translate domain exceptions into HTTP status codes.

Hierarchy:
    GifVoteError                      - root for all application errors
    ├── NotFoundError                 - a client-supplied id does not resolve
    │   ├── TopicNotFoundError        - unknown topic id
    │   └── GifNotFoundError          - unknown gif id
    ├── ProviderError                 - Giphy lookup failed
    │   ├── ProviderUnavailableError  - transport failure or timeout
    │   ├── ProviderResponseError     - non-2xx status or unexpected payload
    │   └── ProviderNoMatchError      - Giphy has no GIF for the tag
    └── PersistenceError              - database persistence errors
        ├── PersistenceTransientError    - transient, safe to retry
        └── PersistenceValidationError   - constraint violation, indicates a bug

Rules:
- No bare `except` anywhere in the codebase - always catch a specific type.
- Nothing in this module retries; retry decisions belong to the client.
"""

from __future__ import annotations


class GifVoteError(Exception):
    """Root exception for all application-level errors."""


# ---------------------------------------------------------------------------
# Lookup errors
# ---------------------------------------------------------------------------


class NotFoundError(GifVoteError):
    """Base class for ids supplied by the client that do not resolve."""


class TopicNotFoundError(NotFoundError):
    """Raised when ``GET /gifs?topic=<id>`` names a topic that does not exist.

    Raised before any provider call is made.
    """

    def __init__(self, topic_id: int) -> None:
        self.topic_id = topic_id
        super().__init__(f"topic not found: id={topic_id}")


class GifNotFoundError(NotFoundError):
    """Raised when a vote targets a gif id that does not exist.

    Raised before any vote row is written.
    """

    def __init__(self, gif_id: int) -> None:
        self.gif_id = gif_id
        super().__init__(f"gif not found: id={gif_id}")


# ---------------------------------------------------------------------------
# Provider errors
# ---------------------------------------------------------------------------


class ProviderError(GifVoteError):
    """Base class for all Giphy lookup failures."""


class ProviderUnavailableError(ProviderError):
    """Giphy could not be reached.

    This covers:
    - DNS resolution or connection failure
    - Request timeout (GIPHY_TIMEOUT_SECONDS)
    """


class ProviderResponseError(ProviderError):
    """Giphy answered, but not with something usable.

    This covers:
    - Non-2xx HTTP status (bad API key, rate limited, server error)
    - Body that is not JSON
    - JSON whose ``data`` object lacks ``id``, ``url`` or an embeddable image URL
    """


class ProviderNoMatchError(ProviderError):
    """Giphy returned an empty ``data`` payload for the requested tag."""

    def __init__(self, tag: str) -> None:
        self.tag = tag
        super().__init__(f"no gif found for tag '{tag}'")


# ---------------------------------------------------------------------------
# Persistence errors
# ---------------------------------------------------------------------------


class PersistenceError(GifVoteError):
    """Base class for all database persistence errors."""


class PersistenceTransientError(PersistenceError):
    """Transient database error.

    This covers:
    - SQLite ``database is locked`` (OperationalError)
    - Disk I/O errors
    - Any SQLAlchemy error not classified as a validation error
    """


class PersistenceValidationError(PersistenceError):
    """Non-transient database error indicating a programming or schema bug.

    This covers:
    - Unexpected unique constraint violations (not handled by insert-or-ignore)
    - Not-null constraint violations on required fields
    - A row that was expected to exist after an insert is missing
    """
