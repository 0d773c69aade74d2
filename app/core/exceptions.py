from typing import Optional


class CatalogError(Exception):
    """Base class for catalog failures callers are expected to handle."""


class ProductNotFound(CatalogError):
    def __init__(self, product_id: str, location: Optional[str] = None):
        self.product_id = product_id
        self.location = location
        if location:
            message = f"Product {product_id} not found at {location}"
        else:
            message = f"Product {product_id} not found in drafts or any live collection"
        super().__init__(message)


class InvalidProductLocation(CatalogError):
    """A draft or request lacks the db/category needed to address a live collection."""


class TransitionFailure(CatalogError):
    """A write or delete failed after the source record was read.

    The record may now exist in both ``source`` and ``destination``; re-running
    the transition recovers it.
    """

    def __init__(self, action: str, product_id: str, source: str, destination: str, step: str, cause: Exception):
        self.action = action
        self.product_id = product_id
        self.source = source
        self.destination = destination
        self.step = step
        self.cause = cause
        super().__init__(
            f"Failed to {action} product {product_id}: {step} step failed "
            f"({source} -> {destination}): {cause}"
        )


class TransportFailure(CatalogError):
    """The document store could not be reached or refused the operation."""


class InvalidPathError(ValueError):
    pass
