"""Read-only views for the public shop (buyers) and retailer catalog."""

from typing import Any, Dict, List, Optional, Sequence

from app.core.exceptions import ProductNotFound
from app.database.document_store import DocumentStore
from app.enums.product_status import ProductStatus
from app.schemas.catalog import CategoryRef
from app.schemas.product import ProductDetailResponse
from app.services.catalog.aggregator import aggregate_products
from app.services.catalog.locator import locate_product
from app.services.product_service import filter_products, parse_specifications, related_products, to_response


async def storefront_products(
    store: DocumentStore,
    db: str,
    categories: Sequence[CategoryRef],
    category: Optional[str] = None,
    search: Optional[str] = None,
    limit: Optional[int] = None,
) -> List[Dict[str, Any]]:
    products = await aggregate_products(
        store, categories, [db], db=db, category=category, include_drafts=False,
    )
    products = filter_products(products, search=search)
    if limit is not None:
        products = products[:limit]
    return products


async def storefront_detail(
    store: DocumentStore,
    db: str,
    product_id: str,
    categories: Sequence[CategoryRef],
) -> ProductDetailResponse:
    """Published product in ``db`` plus up to six siblings from its category.

    Drafts are never shown; a product only present as a draft is not found.
    """
    located = await locate_product(store, product_id, categories, [db])
    if located.status is not ProductStatus.published:
        raise ProductNotFound(product_id, db)

    related = await related_products(store, db, located.category, product_id, categories)
    return ProductDetailResponse(
        product=to_response(located.record, categories),
        specifications=parse_specifications(located.record.get("specifications")),
        related=[to_response(r, categories) for r in related],
    )
