"""Giphy API client.

Wraps the ``GET /v1/gifs/random`` endpoint. The client owns no connection
pool of its own: it is handed a shared ``httpx.AsyncClient`` created once in
the application lifespan, so tests can pass one built on
``httpx.MockTransport``.

Every outcome other than a usable GIF is reported as a ProviderError subclass
so callers never see httpx exceptions or KeyErrors from the payload:

    transport failure / timeout  → ProviderUnavailableError
    non-2xx / non-JSON / bad shape → ProviderResponseError
    empty ``data``               → ProviderNoMatchError

No retries.
"""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import ValidationError

from gifvote.domain.exceptions import (
    ProviderNoMatchError,
    ProviderResponseError,
    ProviderUnavailableError,
)
from gifvote.domain.models import GiphyGif

RANDOM_PATH = "/v1/gifs/random"


def _embed_url(data: dict[str, Any]) -> Any:
    """Return the direct image URL from a random-endpoint ``data`` object.

    Older payloads carry a flat ``image_url``; current ones only nest it
    under ``images.original.url``.
    """
    if data.get("image_url"):
        return data["image_url"]
    images = data.get("images")
    if isinstance(images, dict):
        original = images.get("original")
        if isinstance(original, dict):
            return original.get("url")
    return None


def parse_random_response(payload: Any, tag: str) -> GiphyGif:
    """Convert a decoded random-endpoint body into a GiphyGif.

    Raises:
        ProviderNoMatchError:  ``data`` is empty.
        ProviderResponseError: The body does not have the expected shape.
    """
    if not isinstance(payload, dict):
        raise ProviderResponseError(f"expected a JSON object, got {type(payload).__name__}")

    data = payload.get("data")
    if not data:
        raise ProviderNoMatchError(tag)
    if not isinstance(data, dict):
        raise ProviderResponseError(f"expected 'data' to be an object, got {type(data).__name__}")

    try:
        return GiphyGif(
            giphy_id=data.get("id"),
            url=data.get("url"),
            embed_url=_embed_url(data),
        )
    except ValidationError as exc:
        raise ProviderResponseError(f"malformed gif in response: {exc}") from exc


class GiphyClient:
    """Fetch random GIFs from Giphy.

    Args:
        http:     Shared async HTTP client. Its timeout applies to every call.
        api_key:  Giphy API key, sent as the ``api_key`` query parameter.
        base_url: Scheme and host of the Giphy API.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        api_key: str,
        base_url: str = "https://api.giphy.com",
    ) -> None:
        self._http = http
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")

    async def random_gif(self, tag: str) -> GiphyGif:
        """Return one random GIF tagged with ``tag``.

        Args:
            tag: Topic name used as the Giphy tag filter. Must be non-blank.

        Raises:
            ValueError:               ``tag`` is empty or whitespace.
            ProviderUnavailableError: Giphy could not be reached in time.
            ProviderResponseError:    Giphy answered with an error or bad payload.
            ProviderNoMatchError:     Giphy has no GIF for ``tag``.
        """
        if not tag or not tag.strip():
            raise ValueError("tag must be a non-empty string")

        try:
            response = await self._http.get(
                f"{self._base_url}{RANDOM_PATH}",
                params={"tag": tag, "api_key": self._api_key},
            )
        except httpx.TransportError as exc:
            raise ProviderUnavailableError(f"giphy request failed: {exc!r}") from exc

        if response.is_error:
            raise ProviderResponseError(f"giphy returned HTTP {response.status_code}")

        try:
            payload = response.json()
        except ValueError as exc:
            raise ProviderResponseError("giphy returned a non-JSON body") from exc

        return parse_random_response(payload, tag)
