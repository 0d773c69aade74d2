from typing import Any, Dict, List, Optional

from app.database.document_store import DocumentStore, join_path
from app.schemas.attribute import AttributeCreate, AttributeUpdate

ATTRIBUTES = "attributes"


async def list_attributes(store: DocumentStore, category: Optional[str] = None) -> List[Dict[str, Any]]:
    filters = {"category": category} if category else None
    return await store.query(ATTRIBUTES, filters)


async def create_attribute(store: DocumentStore, data: AttributeCreate) -> Dict[str, Any]:
    payload = data.model_dump()
    attribute_id = await store.add(ATTRIBUTES, payload)
    return {**payload, "id": attribute_id}


async def get_attribute(store: DocumentStore, attribute_id: str) -> Optional[Dict[str, Any]]:
    return await store.get(join_path(ATTRIBUTES, attribute_id))


async def update_attribute(store: DocumentStore, attribute_id: str, data: AttributeUpdate) -> Optional[Dict[str, Any]]:
    path = join_path(ATTRIBUTES, attribute_id)
    if await store.get(path) is None:
        return None
    await store.set(path, data.model_dump(exclude_unset=True), merge=True)
    return await store.get(path)


async def delete_attribute(store: DocumentStore, attribute_id: str) -> bool:
    path = join_path(ATTRIBUTES, attribute_id)
    if await store.get(path) is None:
        return False
    await store.delete(path)
    return True
