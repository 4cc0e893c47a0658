"""Application services.

Services sit between the HTTP routers and the infrastructure layer
(repository, Giphy client). They log, and they translate infrastructure
errors into domain exceptions.
"""

from gifvote.services.gifs import GifService

__all__ = ["GifService"]
