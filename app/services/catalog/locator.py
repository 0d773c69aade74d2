"""Resolve a product id to its current record and location.

There is no id -> location index, so every place the product could live is
checked: ``drafts/{id}`` plus ``{db}/{slug}/products/{id}`` for every known
namespace and category. All reads go out at once and all of them are awaited.
"""

import asyncio
from typing import List, NamedTuple, Optional, Sequence

from app.core.exceptions import InvalidPathError, ProductNotFound, TransportFailure
from app.core.logging_config import get_logger
from app.database.document_store import DocumentStore
from app.enums.product_status import ProductStatus
from app.schemas.catalog import CategoryRef, LocatedProduct
from app.services.catalog.paths import draft_path, is_published, live_path
from app.services.category_service import slugify

logger = get_logger("catalog.locator")


class Candidate(NamedTuple):
    path: str
    db: Optional[str] = None
    category: Optional[str] = None

    @property
    def is_live(self) -> bool:
        return self.db is not None


def candidate_locations(
    product_id: str,
    categories: Sequence[CategoryRef],
    databases: Sequence[str],
) -> List[Candidate]:
    """Drafts first, then db x category in the order given."""
    candidates = [Candidate(draft_path(product_id))]
    for db in databases:
        for ref in categories:
            try:
                candidates.append(Candidate(live_path(db, ref.slug, product_id), db, ref.slug))
            except InvalidPathError:
                logger.debug("Skipping category %r: slug %r is not a valid path segment", ref.name, ref.slug)
    return candidates


async def locate_product(
    store: DocumentStore,
    product_id: str,
    categories: Sequence[CategoryRef],
    databases: Sequence[str],
) -> LocatedProduct:
    """Find ``product_id`` in drafts or any live collection.

    A published copy wins over a draft with the same id; the paths that lost
    are reported in ``duplicates``. Individual read failures count as misses.

    Raises:
        ValueError: ``product_id`` is empty.
        ProductNotFound: no candidate holds the product.
        TransportFailure: every candidate read failed.
    """
    if not product_id:
        raise ValueError("product_id must be a non-empty string")

    candidates = candidate_locations(product_id, categories, databases)
    results = await asyncio.gather(
        *(store.get(candidate.path) for candidate in candidates),
        return_exceptions=True,
    )

    matches = []
    failures = 0
    for candidate, result in zip(candidates, results):
        if isinstance(result, BaseException):
            if not isinstance(result, Exception):
                raise result
            failures += 1
            logger.debug("Read of %s failed, treating as a miss: %s", candidate.path, result)
            continue
        if result is None:
            continue
        if candidate.is_live and not is_published(result):
            continue
        matches.append((candidate, result))

    if failures == len(candidates):
        raise TransportFailure(f"Every candidate read for product {product_id} failed")
    if not matches:
        raise ProductNotFound(product_id)

    live_matches = [m for m in matches if m[0].is_live]
    candidate, record = live_matches[0] if live_matches else matches[0]
    duplicates = [c.path for c, _ in matches if c.path != candidate.path]
    if duplicates:
        logger.warning("Product %s found at %s and also at %s", product_id, candidate.path, duplicates)

    if candidate.is_live:
        status = ProductStatus.published
        db, category = candidate.db, candidate.category
    else:
        status = ProductStatus.draft
        db = record.get("db")
        category = slugify(record["category"]) if record.get("category") else None

    return LocatedProduct(
        record={**record, "db": db, "category": category, "status": status.value},
        status=status,
        db=db,
        category=category,
        path=candidate.path,
        duplicates=duplicates,
    )
