from pydantic import BaseModel, EmailStr
from typing import Optional
from app.enums.user_roles import UserRole


class UserBase(BaseModel):
    username: str
    email: Optional[EmailStr] = None
    name: Optional[str] = None


class UserCreate(UserBase):
    password: str
    role: UserRole = UserRole.customer


class UserRegister(UserBase):
    password: str


class UserUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    role: Optional[UserRole] = None
    is_active: Optional[bool] = None


class RoleAssignment(BaseModel):
    role: UserRole


class UserResponse(UserBase):
    id: str
    role: UserRole
    is_active: bool = True
    created_at: Optional[str] = None
    last_login: Optional[str] = None

    class Config:
        extra = "ignore"


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class TokenData(BaseModel):
    username: Optional[str] = None
    role: Optional[str] = None
