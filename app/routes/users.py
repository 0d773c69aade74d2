from typing import List

from fastapi import APIRouter, Depends, HTTPException
from app.database.connection import get_store
from app.database.document_store import DocumentStore
from app.dependencies.auth import require_admin
from app.schemas.user import RoleAssignment, UserCreate, UserResponse, UserUpdate
from app.services.user_service import (
    create_user, get_user, get_user_by_username, list_users,
    update_user, set_user_role, delete_user, public_view,
)

router = APIRouter(prefix="/users", tags=["Users"], dependencies=[Depends(require_admin)])


@router.get("/", response_model=List[UserResponse])
async def list_all(store: DocumentStore = Depends(get_store)):
    return await list_users(store)


@router.post("/", response_model=UserResponse, status_code=201)
async def create(data: UserCreate, store: DocumentStore = Depends(get_store)):
    if await get_user_by_username(store, data.username):
        raise HTTPException(status_code=400, detail="Username already taken")
    return public_view(await create_user(store, data))


@router.get("/{user_id}", response_model=UserResponse)
async def get(user_id: str, store: DocumentStore = Depends(get_store)):
    user = await get_user(store, user_id)
    if not user:
        raise HTTPException(404, "User not found")
    return public_view(user)


@router.put("/{user_id}", response_model=UserResponse)
async def update(user_id: str, data: UserUpdate, store: DocumentStore = Depends(get_store)):
    user = await update_user(store, user_id, data)
    if not user:
        raise HTTPException(404, "User not found")
    return public_view(user)


# ROLE CLAIMS
@router.put("/{user_id}/role", response_model=UserResponse)
async def assign_role(user_id: str, data: RoleAssignment, store: DocumentStore = Depends(get_store)):
    try:
        user = await set_user_role(store, user_id, data.role)
    except ValueError as exc:
        raise HTTPException(422, str(exc))
    if not user:
        raise HTTPException(404, "User not found")
    return public_view(user)


@router.delete("/{user_id}")
async def delete(user_id: str, store: DocumentStore = Depends(get_store)):
    if not await delete_user(store, user_id):
        raise HTTPException(404, "User not found")
    return {"message": "User deleted"}
