"""Draft <-> Published transitions.

Each transition reads the source, writes the destination, then deletes the
source. The write comes first so an interruption leaves the record in both
places rather than in neither; running the same transition again finishes
the move. Nothing here locks: concurrent transitions on one id race and the
last writer wins.
"""

from typing import Any, Dict

from app.core.exceptions import InvalidProductLocation, ProductNotFound, TransitionFailure
from app.core.logging_config import get_logger
from app.database.document_store import DocumentStore
from app.enums.product_status import ProductStatus
from app.schemas.catalog import TransitionResult
from app.services.catalog.paths import draft_path, live_path
from app.services.category_service import slugify

logger = get_logger("catalog.transitions")

PUBLISH = "publish"
UNPUBLISH = "unpublish"


async def _move(
    store: DocumentStore,
    action: str,
    product_id: str,
    source: str,
    destination: str,
    record: Dict[str, Any],
) -> None:
    try:
        await store.set(destination, record)
    except Exception as exc:
        logger.error("Failed to %s %s: write to %s failed: %s", action, product_id, destination, exc)
        raise TransitionFailure(action, product_id, source, destination, "write", exc) from exc

    try:
        await store.delete(source)
    except Exception as exc:
        logger.error(
            "Failed to %s %s: delete of %s failed, record now also at %s: %s",
            action, product_id, source, destination, exc,
        )
        raise TransitionFailure(action, product_id, source, destination, "delete", exc) from exc


# ---------- PUBLISH ----------

async def publish(store: DocumentStore, product_id: str) -> TransitionResult:
    """Move ``drafts/{id}`` to ``{db}/{category}/products/{id}``.

    The destination comes from the draft's own ``db`` and ``category`` fields.
    """
    source = draft_path(product_id)
    record = await store.get(source)
    if record is None:
        raise ProductNotFound(product_id, source)

    db, category = record.get("db"), record.get("category")
    if not db or not category:
        raise InvalidProductLocation(
            f"Draft {product_id} is missing required fields: db or category"
        )

    destination = live_path(db, slugify(category), product_id)
    logger.info("Publishing %s to %s", product_id, destination)

    await _move(store, PUBLISH, product_id, source, destination,
                {**record, "status": ProductStatus.published.value})

    return TransitionResult(
        action=PUBLISH,
        product_id=product_id,
        source=source,
        destination=destination,
        message=f"Product {product_id} published successfully to {destination}.",
    )


# ---------- UNPUBLISH ----------

async def unpublish(store: DocumentStore, product_id: str, db: str, category: str) -> TransitionResult:
    """Move a live record back to ``drafts/{id}``.

    Live records do not reliably describe where they are stored, so the
    caller names the ``db`` and ``category``; both end up on the draft.
    """
    if not db or not category:
        raise InvalidProductLocation("Database and category are required for unpublishing")

    slug = slugify(category)
    source = live_path(db, slug, product_id)
    record = await store.get(source)
    if record is None:
        raise ProductNotFound(product_id, source)

    destination = draft_path(product_id)
    logger.info("Unpublishing %s from %s", product_id, source)

    draft = {**record, "status": ProductStatus.draft.value, "db": db}
    if slugify(record.get("category") or "") != slug:
        draft["category"] = slug

    await _move(store, UNPUBLISH, product_id, source, destination, draft)

    return TransitionResult(
        action=UNPUBLISH,
        product_id=product_id,
        source=source,
        destination=destination,
        message=f"Product {product_id} unpublished and moved to drafts.",
    )
