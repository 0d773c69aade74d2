import re
from typing import Any, Dict, List, Optional

from app.database.document_store import DocumentStore, join_path
from app.schemas.catalog import CategoryRef
from app.schemas.category import CategoryCreate, CategoryUpdate

CATEGORIES = "categories"

_WHITESPACE = re.compile(r"\s+")


def slugify(name: str) -> str:
    """Path slug for a category name: lowercased, whitespace runs become ``-``.

    Never stored. Renaming a category therefore orphans live collections
    written under the old slug.
    """
    return _WHITESPACE.sub("-", name.lower())


def _with_slug(record: Dict[str, Any]) -> Dict[str, Any]:
    return {**record, "slug": slugify(record.get("name") or record["id"])}


# --------------------------
# DIRECTORY
# --------------------------
async def list_categories(store: DocumentStore) -> List[Dict[str, Any]]:
    records = await store.query(CATEGORIES)
    return [_with_slug(r) for r in records]


async def category_refs(store: DocumentStore) -> List[CategoryRef]:
    return [CategoryRef(name=c.get("name") or c["id"], slug=c["slug"]) for c in await list_categories(store)]


def category_name_for(slug: Optional[str], categories: List[CategoryRef]) -> Optional[str]:
    for ref in categories:
        if ref.slug == slug:
            return ref.name
    return slug


# --------------------------
# CRUD
# --------------------------
async def create_category(store: DocumentStore, data: CategoryCreate) -> Dict[str, Any]:
    payload = data.model_dump()
    category_id = await store.add(CATEGORIES, payload)
    return _with_slug({**payload, "id": category_id})


async def get_category(store: DocumentStore, category_id: str) -> Optional[Dict[str, Any]]:
    record = await store.get(join_path(CATEGORIES, category_id))
    return _with_slug(record) if record else None


async def update_category(store: DocumentStore, category_id: str, data: CategoryUpdate) -> Optional[Dict[str, Any]]:
    path = join_path(CATEGORIES, category_id)
    if await store.get(path) is None:
        return None
    await store.set(path, data.model_dump(exclude_unset=True), merge=True)
    return await get_category(store, category_id)


async def delete_category(store: DocumentStore, category_id: str) -> bool:
    path = join_path(CATEGORIES, category_id)
    if await store.get(path) is None:
        return False
    await store.delete(path)
    return True
