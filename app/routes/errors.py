from fastapi import HTTPException, status

from app.core.exceptions import (
    CatalogError,
    InvalidPathError,
    InvalidProductLocation,
    ProductNotFound,
    TransitionFailure,
    TransportFailure,
)


def to_http_exception(exc: Exception) -> HTTPException:
    """Translate a catalog failure into the response the UI shows."""
    if isinstance(exc, ProductNotFound):
        return HTTPException(status.HTTP_404_NOT_FOUND, str(exc))
    if isinstance(exc, InvalidProductLocation):
        return HTTPException(status.HTTP_422_UNPROCESSABLE_ENTITY, str(exc))
    if isinstance(exc, TransitionFailure):
        return HTTPException(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            {
                "message": str(exc),
                "action": exc.action,
                "step": exc.step,
                "source": exc.source,
                "destination": exc.destination,
            },
        )
    if isinstance(exc, TransportFailure):
        return HTTPException(status.HTTP_503_SERVICE_UNAVAILABLE, "Document store unavailable")
    if isinstance(exc, (InvalidPathError, ValueError)):
        return HTTPException(status.HTTP_400_BAD_REQUEST, str(exc))
    if isinstance(exc, CatalogError):
        return HTTPException(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))
    raise exc
