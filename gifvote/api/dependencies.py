"""FastAPI dependency injection providers.

Dependencies are injected via function parameters using `Depends()`. The
GifService is built either by the caller of ``create_app`` (tests pass one
wired to fakes) or by the application lifespan, and is stored in
``app.state.gif_service`` in both cases.

Example usage:
    @router.get("/topics")
    async def list_topics(service: GifServiceDep):
        return await service.list_topics()
"""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from gifvote.services import GifService


def get_gif_service(request: Request) -> GifService:
    """Dependency that provides the shared GifService.

    Args:
        request: FastAPI request object (injected automatically).

    Returns:
        The GifService stored on app state.

    Raises:
        HTTPException: 503 Service Unavailable if the service is not initialized.
    """
    service: GifService | None = getattr(request.app.state, "gif_service", None)

    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service not initialized. Service is starting or shutting down.",
        )

    return service


# Type alias for use in route handler signatures
GifServiceDep = Annotated[GifService, Depends(get_gif_service)]
