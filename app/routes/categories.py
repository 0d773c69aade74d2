from typing import List

from fastapi import APIRouter, Depends, HTTPException
from app.database.connection import get_store
from app.database.document_store import DocumentStore
from app.dependencies.auth import require_admin
from app.schemas.category import CategoryCreate, CategoryResponse, CategoryUpdate
from app.services.category_service import (
    create_category, get_category, list_categories,
    update_category, delete_category,
)

router = APIRouter(prefix="/categories", tags=["Categories"])


@router.get("/", response_model=List[CategoryResponse])
async def list_all(store: DocumentStore = Depends(get_store)):
    return await list_categories(store)


@router.post("/", response_model=CategoryResponse, status_code=201, dependencies=[Depends(require_admin)])
async def create(data: CategoryCreate, store: DocumentStore = Depends(get_store)):
    return await create_category(store, data)


@router.get("/{category_id}", response_model=CategoryResponse)
async def get(category_id: str, store: DocumentStore = Depends(get_store)):
    category = await get_category(store, category_id)
    if not category:
        raise HTTPException(404, "Category not found")
    return category


# Renaming changes the slug; live products under the old slug are not moved.
@router.put("/{category_id}", response_model=CategoryResponse, dependencies=[Depends(require_admin)])
async def update(category_id: str, data: CategoryUpdate, store: DocumentStore = Depends(get_store)):
    category = await update_category(store, category_id, data)
    if not category:
        raise HTTPException(404, "Category not found")
    return category


@router.delete("/{category_id}", dependencies=[Depends(require_admin)])
async def delete(category_id: str, store: DocumentStore = Depends(get_store)):
    if not await delete_category(store, category_id):
        raise HTTPException(404, "Category not found")
    return {"message": "Category deleted"}
