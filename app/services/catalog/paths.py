from typing import Any, Mapping

from app.database.document_store import join_path
from app.enums.product_status import ProductStatus

DRAFTS = "drafts"
PRODUCTS = "products"


def draft_path(product_id: str) -> str:
    return join_path(DRAFTS, product_id)


def live_collection_path(db: str, category_slug: str) -> str:
    return join_path(db, category_slug, PRODUCTS)


def live_path(db: str, category_slug: str, product_id: str) -> str:
    return join_path(db, category_slug, PRODUCTS, product_id)


def is_published(record: Mapping[str, Any]) -> bool:
    """Live documents only count when they carry the Published status."""
    return record.get("status") == ProductStatus.published.value
