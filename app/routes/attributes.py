from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from app.database.connection import get_store
from app.database.document_store import DocumentStore
from app.dependencies.auth import require_admin, require_editor
from app.schemas.attribute import AttributeCreate, AttributeResponse, AttributeUpdate
from app.services.attribute_service import (
    create_attribute, get_attribute, list_attributes,
    update_attribute, delete_attribute,
)

router = APIRouter(prefix="/attributes", tags=["Attributes"], dependencies=[Depends(require_editor)])


@router.get("/", response_model=List[AttributeResponse])
async def list_all(category: Optional[str] = None, store: DocumentStore = Depends(get_store)):
    return await list_attributes(store, category)


@router.post("/", response_model=AttributeResponse, status_code=201, dependencies=[Depends(require_admin)])
async def create(data: AttributeCreate, store: DocumentStore = Depends(get_store)):
    return await create_attribute(store, data)


@router.get("/{attribute_id}", response_model=AttributeResponse)
async def get(attribute_id: str, store: DocumentStore = Depends(get_store)):
    attribute = await get_attribute(store, attribute_id)
    if not attribute:
        raise HTTPException(404, "Attribute not found")
    return attribute


@router.put("/{attribute_id}", response_model=AttributeResponse, dependencies=[Depends(require_admin)])
async def update(attribute_id: str, data: AttributeUpdate, store: DocumentStore = Depends(get_store)):
    attribute = await update_attribute(store, attribute_id, data)
    if not attribute:
        raise HTTPException(404, "Attribute not found")
    return attribute


@router.delete("/{attribute_id}", dependencies=[Depends(require_admin)])
async def delete(attribute_id: str, store: DocumentStore = Depends(get_store)):
    if not await delete_attribute(store, attribute_id):
        raise HTTPException(404, "Attribute not found")
    return {"message": "Attribute deleted"}
