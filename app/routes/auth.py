from fastapi import APIRouter, Depends, HTTPException
from fastapi.security import OAuth2PasswordRequestForm
from app.database.connection import get_store
from app.database.document_store import DocumentStore
from app.enums.user_roles import UserRole
from app.schemas.user import UserCreate, UserRegister, UserResponse
from app.core.security import (
    create_access_token,
    decode_refresh_token,
    create_refresh_token
)
from app.services.user_service import authenticate_user, create_user, get_user_by_username, public_view

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/register", response_model=UserResponse)
async def register_user(data: UserRegister, store: DocumentStore = Depends(get_store)):
    existing = await get_user_by_username(store, data.username)
    if existing:
        raise HTTPException(status_code=400, detail="Username already taken")

    # self-registration only ever creates customers; roles are granted by an admin
    user = await create_user(store, UserCreate(**data.model_dump(), role=UserRole.customer))
    return public_view(user)


@router.post("/login")
async def login(form_data: OAuth2PasswordRequestForm = Depends(), store: DocumentStore = Depends(get_store)):
    user = await authenticate_user(store, form_data.username, form_data.password)

    if not user:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    if not user.get("is_active", True):
        raise HTTPException(status_code=400, detail="Inactive user")

    return {
        "access_token": create_access_token(user["username"], user["role"]),
        "refresh_token": create_refresh_token(user["username"], user["role"]),
        "token_type": "bearer"
    }

@router.post("/refresh")
async def refresh_token(refresh_token: str):
    payload = decode_refresh_token(refresh_token)

    if not payload or not payload.username:
        raise HTTPException(status_code=401, detail="Invalid or expired refresh token")

    return {
        "access_token": create_access_token(payload.username, payload.role),
        "token_type": "bearer"
    }
