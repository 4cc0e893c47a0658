"""Domain layer public API.

Import domain types from here rather than from gifvote.domain.models directly.
This keeps the internal module structure free to change without breaking callers.
"""

from gifvote.domain.exceptions import (
    GifNotFoundError,
    GifVoteError,
    NotFoundError,
    PersistenceError,
    PersistenceTransientError,
    PersistenceValidationError,
    ProviderError,
    ProviderNoMatchError,
    ProviderResponseError,
    ProviderUnavailableError,
    TopicNotFoundError,
)
from gifvote.domain.models import Gif, GiphyGif, RankedGif, Topic, VoteKind

__all__ = [
    # Models
    "Gif",
    "GiphyGif",
    "RankedGif",
    "Topic",
    "VoteKind",
    # Exceptions
    "GifVoteError",
    "NotFoundError",
    "TopicNotFoundError",
    "GifNotFoundError",
    "ProviderError",
    "ProviderUnavailableError",
    "ProviderResponseError",
    "ProviderNoMatchError",
    "PersistenceError",
    "PersistenceTransientError",
    "PersistenceValidationError",
]
