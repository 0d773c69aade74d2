from typing import Any, Dict, List, Optional

from app.core.logging_config import get_logger
from app.core.security import get_password_hash, verify_password
from app.database.document_store import DocumentStore, join_path
from app.enums.user_roles import UserRole
from app.schemas.user import UserCreate, UserUpdate
from app.services.timestamps import utcnow_iso

logger = get_logger("users")

USERS = "users"

# roles that can be granted as back-office claims
ASSIGNABLE_ROLES = (UserRole.admin, UserRole.editor)


def public_view(user: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in user.items() if k != "hashed_password"}


async def get_user(store: DocumentStore, user_id: str) -> Optional[Dict[str, Any]]:
    return await store.get(join_path(USERS, user_id))


async def get_user_by_username(store: DocumentStore, username: str) -> Optional[Dict[str, Any]]:
    matches = await store.query(USERS, filters={"username": username}, limit=1)
    return matches[0] if matches else None


async def list_users(store: DocumentStore) -> List[Dict[str, Any]]:
    return [public_view(u) for u in await store.query(USERS)]


async def create_user(store: DocumentStore, data: UserCreate) -> Dict[str, Any]:
    payload = data.model_dump(mode="json", exclude={"password"})
    payload.update(
        hashed_password=get_password_hash(data.password),
        is_active=True,
        created_at=utcnow_iso(),
        last_login=None,
    )
    user_id = await store.add(USERS, payload)
    logger.info("Created user %s (%s) with role %s", data.username, user_id, payload["role"])
    return {**payload, "id": user_id}


async def authenticate_user(store: DocumentStore, username: str, password: str) -> Optional[Dict[str, Any]]:
    user = await get_user_by_username(store, username)
    if not user or not verify_password(password, user.get("hashed_password", "")):
        return None
    await store.set(join_path(USERS, user["id"]), {"last_login": utcnow_iso()}, merge=True)
    return user


async def update_user(store: DocumentStore, user_id: str, data: UserUpdate) -> Optional[Dict[str, Any]]:
    path = join_path(USERS, user_id)
    if await store.get(path) is None:
        return None
    await store.set(path, data.model_dump(mode="json", exclude_unset=True), merge=True)
    return await store.get(path)


async def set_user_role(store: DocumentStore, user_id: str, role: UserRole) -> Optional[Dict[str, Any]]:
    """Grant a back-office role; only Admin and Editor can be assigned this way."""
    role = UserRole(role)
    if role not in ASSIGNABLE_ROLES:
        raise ValueError(f"Role {role.value} cannot be assigned; expected Admin or Editor")
    return await update_user(store, user_id, UserUpdate(role=role))


async def delete_user(store: DocumentStore, user_id: str) -> bool:
    path = join_path(USERS, user_id)
    if await store.get(path) is None:
        return False
    await store.delete(path)
    return True


async def ensure_admin(store: DocumentStore, username: str, password: str) -> Dict[str, Any]:
    existing = await get_user_by_username(store, username)
    if existing:
        return existing
    return await create_user(store, UserCreate(username=username, password=password, role=UserRole.admin))
