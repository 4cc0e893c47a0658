"""API routers.

Each router module defines endpoints for a specific resource:
  - topics: Topic listing (GET /topics)
  - gifs:   Random GIF lookup, ranking and voting (/gifs...)
"""

from gifvote.api.routers.gifs import router as gifs_router
from gifvote.api.routers.topics import router as topics_router

__all__ = ["gifs_router", "topics_router"]
