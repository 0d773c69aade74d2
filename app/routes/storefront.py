from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from app.core.config import settings
from app.core.exceptions import CatalogError
from app.database.connection import get_store
from app.database.document_store import DocumentStore
from app.dependencies.catalog import get_category_refs
from app.routes.errors import to_http_exception
from app.schemas.catalog import CategoryRef
from app.schemas.product import ProductDetailResponse, ProductListResponse
from app.services.product_service import to_response
from app.services.storefront_service import storefront_detail, storefront_products


def build_storefront_router(prefix: str, db: str, tag: str) -> APIRouter:
    """Public, published-only listing and detail endpoints for one namespace."""
    router = APIRouter(prefix=prefix, tags=[tag])

    @router.get("/products", response_model=ProductListResponse)
    async def list_published(
        category: Optional[str] = None,
        search: Optional[str] = None,
        limit: Optional[int] = Query(None, ge=1),
        store: DocumentStore = Depends(get_store),
        categories: List[CategoryRef] = Depends(get_category_refs),
    ):
        try:
            products = await storefront_products(
                store, db, categories, category=category, search=search, limit=limit,
            )
        except (CatalogError, ValueError) as exc:
            raise to_http_exception(exc)
        return ProductListResponse(items=[to_response(p, categories) for p in products], total=len(products))

    @router.get("/products/{product_id}", response_model=ProductDetailResponse)
    async def product_detail(
        product_id: str,
        store: DocumentStore = Depends(get_store),
        categories: List[CategoryRef] = Depends(get_category_refs),
    ):
        try:
            return await storefront_detail(store, db, product_id, categories)
        except (CatalogError, ValueError) as exc:
            raise to_http_exception(exc)

    return router


shop_router = build_storefront_router("/shop", settings.SHOP_DATABASE, "Shop")
retailer_router = build_storefront_router("/catalog", settings.RETAILER_DATABASE, "Retailer Catalog")
