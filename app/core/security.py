# app/core/security.py
from datetime import datetime, timedelta
from typing import Optional

from jose import jwt, JWTError
from passlib.context import CryptContext

from app.core.config import settings
from app.schemas.user import TokenData

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

ACCESS = "access"
REFRESH = "refresh"


# Password hashing
def verify_password(plain_password: str, hashed_password: str) -> bool:
    if not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def _encode(claims: dict, token_type: str, expires: timedelta) -> str:
    payload = {**claims, "type": token_type, "exp": datetime.utcnow() + expires}
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def create_access_token(username: str, role: str, expires_minutes: Optional[int] = None) -> str:
    minutes = expires_minutes or settings.ACCESS_TOKEN_EXPIRE_MINUTES
    return _encode({"sub": username, "role": role}, ACCESS, timedelta(minutes=minutes))


def create_refresh_token(username: str, role: str, expires_days: Optional[int] = None) -> str:
    days = expires_days or settings.REFRESH_TOKEN_EXPIRE_DAYS
    return _encode({"sub": username, "role": role}, REFRESH, timedelta(days=days))


def _decode(token: str, token_type: str) -> TokenData:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return TokenData()
    # a refresh token must not pass as an access token and vice versa
    if payload.get("type") != token_type:
        return TokenData()
    return TokenData(username=payload.get("sub"), role=payload.get("role"))


def decode_access_token(token: str) -> TokenData:
    return _decode(token, ACCESS)


def decode_refresh_token(token: str) -> TokenData:
    return _decode(token, REFRESH)
