from typing import Any, Dict, List, Optional, Sequence

from app.core.exceptions import InvalidProductLocation
from app.core.logging_config import get_logger
from app.database.document_store import DocumentStore
from app.enums.product_status import ProductStatus
from app.schemas.catalog import CategoryRef, LocatedProduct
from app.schemas.product import (
    PLACEHOLDER_IMAGE,
    ProductCreate,
    ProductResponse,
    ProductUpdate,
    SpecificationItem,
)
from app.services.catalog.aggregator import aggregate_products
from app.services.catalog.locator import locate_product
from app.services.catalog.paths import DRAFTS, is_published, live_collection_path
from app.services.category_service import category_name_for, slugify
from app.services.timestamps import normalize_timestamp, utcnow_iso

logger = get_logger("products")

RELATED_LIMIT = 6


# --------------------------
# CREATE DRAFT
# --------------------------
async def create_draft(store: DocumentStore, data: ProductCreate, databases: Sequence[str]) -> Dict[str, Any]:
    if data.db not in databases:
        raise InvalidProductLocation(f"Unknown database {data.db!r}; expected one of {list(databases)}")

    now = utcnow_iso()
    payload = data.model_dump(mode="json")
    payload.update(
        category=slugify(data.category),
        status=ProductStatus.draft.value,
        created_at=now,
        updated_at=now,
    )
    product_id = await store.add(DRAFTS, payload)
    logger.info("Created draft %s in %s/%s", product_id, payload["db"], payload["category"])
    return {**payload, "id": product_id}


# --------------------------
# GET PRODUCT
# --------------------------
async def get_product(
    store: DocumentStore,
    product_id: str,
    categories: Sequence[CategoryRef],
    databases: Sequence[str],
) -> LocatedProduct:
    return await locate_product(store, product_id, categories, databases)


# --------------------------
# LIST PRODUCTS
# --------------------------
async def list_products(
    store: DocumentStore,
    categories: Sequence[CategoryRef],
    databases: Sequence[str],
    db: Optional[str] = None,
    category: Optional[str] = None,
    search: Optional[str] = None,
    status: Optional[ProductStatus] = None,
    limit: Optional[int] = None,
) -> List[Dict[str, Any]]:
    products = await aggregate_products(store, categories, databases, db=db, category=category)
    products = filter_products(products, search=search, status=status)
    if limit is not None:
        products = products[:limit]
    return products


def filter_products(
    products: List[Dict[str, Any]],
    search: Optional[str] = None,
    status: Optional[ProductStatus] = None,
) -> List[Dict[str, Any]]:
    """In-memory search over already fetched products."""
    if search:
        term = search.lower()
        products = [p for p in products if term in (p.get("title") or "").lower()]
    if status:
        products = [p for p in products if p.get("status") == ProductStatus(status).value]
    return products


# --------------------------
# UPDATE PRODUCT
# --------------------------
async def update_product(
    store: DocumentStore,
    product_id: str,
    data: ProductUpdate,
    categories: Sequence[CategoryRef],
    databases: Sequence[str],
) -> Dict[str, Any]:
    """Merge ``data`` into the product wherever it currently lives."""
    located = await locate_product(store, product_id, categories, databases)
    changes = data.model_dump(mode="json", exclude_unset=True)
    changes["updated_at"] = utcnow_iso()
    await store.set(located.path, changes, merge=True)
    return {**located.record, **changes}


# --------------------------
# DELETE PRODUCT
# --------------------------
async def delete_product(
    store: DocumentStore,
    product_id: str,
    categories: Sequence[CategoryRef],
    databases: Sequence[str],
) -> List[str]:
    """Delete the product and any leftover copy; returns the deleted paths."""
    located = await locate_product(store, product_id, categories, databases)
    paths = [located.path, *located.duplicates]
    for path in paths:
        await store.delete(path)
    logger.info("Deleted product %s from %s", product_id, paths)
    return paths


# --------------------------
# RELATED PRODUCTS
# --------------------------
async def related_products(
    store: DocumentStore,
    db: str,
    category_slug: str,
    exclude_id: str,
    categories: Sequence[CategoryRef] = (),
    limit: int = RELATED_LIMIT,
) -> List[Dict[str, Any]]:
    records = await store.query(
        live_collection_path(db, category_slug),
        filters={"status": ProductStatus.published.value},
        limit=limit + 1,
    )
    name = category_name_for(category_slug, list(categories))
    related = [
        {**r, "db": db, "category": category_slug, "category_name": name}
        for r in records
        if r["id"] != exclude_id and is_published(r)
    ]
    return related[:limit]


# --------------------------
# PRESENTATION HELPERS
# --------------------------
def parse_specifications(text: Optional[str]) -> List[SpecificationItem]:
    """Split ``"Size: 10m, Finish: matte, Washable"`` into key/value items."""
    if not text:
        return []
    items = []
    for chunk in text.split(","):
        parts = chunk.split(":")
        if len(parts) == 2:
            key, value = parts[0].strip(), parts[1].strip()
        else:
            key, value = chunk.strip(), ""
        if key:
            items.append(SpecificationItem(key=key, value=value))
    return items


def to_response(record: Dict[str, Any], categories: Sequence[CategoryRef] = ()) -> ProductResponse:
    images = record.get("images") or []
    category = record.get("category")
    return ProductResponse(
        **{
            **record,
            "images": images,
            "additional_images": record.get("additional_images") or [],
            "attributes": record.get("attributes") or {},
            "image_url": images[0] if images else PLACEHOLDER_IMAGE,
            "category_name": record.get("category_name") or category_name_for(category, list(categories)),
            "created_at": normalize_timestamp(record.get("created_at")),
        }
    )
