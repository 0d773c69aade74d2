from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from app.core.exceptions import CatalogError
from app.database.connection import get_store
from app.database.document_store import DocumentStore
from app.dependencies.auth import require_editor
from app.dependencies.catalog import get_category_refs, get_databases
from app.enums.product_status import ProductStatus
from app.routes.errors import to_http_exception
from app.schemas.catalog import CategoryRef, TransitionResult, UnpublishRequest
from app.schemas.product import ProductCreate, ProductListResponse, ProductResponse, ProductUpdate
from app.services.catalog.transitions import publish, unpublish
from app.services.product_service import (
    create_draft, get_product, list_products,
    update_product, delete_product, to_response,
)


router = APIRouter(prefix="/products", tags=["Product Management"], dependencies=[Depends(require_editor)])

# LIST
@router.get("/", response_model=ProductListResponse)
async def list_all(
    db: Optional[str] = None,
    category: Optional[str] = None,
    search: Optional[str] = None,
    status: Optional[ProductStatus] = None,
    limit: Optional[int] = Query(None, ge=1),
    store: DocumentStore = Depends(get_store),
    categories: List[CategoryRef] = Depends(get_category_refs),
    databases: List[str] = Depends(get_databases),
):
    try:
        products = await list_products(
            store, categories, databases,
            db=db, category=category, search=search, status=status, limit=limit,
        )
    except (CatalogError, ValueError) as exc:
        raise to_http_exception(exc)
    return ProductListResponse(items=[to_response(p, categories) for p in products], total=len(products))

# CREATE (always a draft)
@router.post("/", response_model=ProductResponse, status_code=201)
async def create(
    data: ProductCreate,
    store: DocumentStore = Depends(get_store),
    categories: List[CategoryRef] = Depends(get_category_refs),
    databases: List[str] = Depends(get_databases),
):
    try:
        product = await create_draft(store, data, databases)
    except (CatalogError, ValueError) as exc:
        raise to_http_exception(exc)
    return to_response(product, categories)

# GET BY ID
@router.get("/{product_id}", response_model=ProductResponse)
async def get(
    product_id: str,
    store: DocumentStore = Depends(get_store),
    categories: List[CategoryRef] = Depends(get_category_refs),
    databases: List[str] = Depends(get_databases),
):
    try:
        located = await get_product(store, product_id, categories, databases)
    except (CatalogError, ValueError) as exc:
        raise to_http_exception(exc)
    return to_response(located.record, categories)

# UPDATE
@router.put("/{product_id}", response_model=ProductResponse)
async def update(
    product_id: str,
    data: ProductUpdate,
    store: DocumentStore = Depends(get_store),
    categories: List[CategoryRef] = Depends(get_category_refs),
    databases: List[str] = Depends(get_databases),
):
    try:
        product = await update_product(store, product_id, data, categories, databases)
    except (CatalogError, ValueError) as exc:
        raise to_http_exception(exc)
    return to_response(product, categories)

# DELETE
@router.delete("/{product_id}")
async def delete(
    product_id: str,
    store: DocumentStore = Depends(get_store),
    categories: List[CategoryRef] = Depends(get_category_refs),
    databases: List[str] = Depends(get_databases),
):
    try:
        paths = await delete_product(store, product_id, categories, databases)
    except (CatalogError, ValueError) as exc:
        raise to_http_exception(exc)
    return {"message": "Product deleted", "paths": paths}

# PUBLISH
@router.post("/{product_id}/publish", response_model=TransitionResult)
async def publish_route(product_id: str, store: DocumentStore = Depends(get_store)):
    try:
        return await publish(store, product_id)
    except (CatalogError, ValueError) as exc:
        raise to_http_exception(exc)

# UNPUBLISH
@router.post("/{product_id}/unpublish", response_model=TransitionResult)
async def unpublish_route(
    product_id: str,
    location: UnpublishRequest,
    store: DocumentStore = Depends(get_store),
):
    try:
        return await unpublish(store, product_id, location.db, location.category)
    except (CatalogError, ValueError) as exc:
        raise to_http_exception(exc)
