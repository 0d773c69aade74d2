from typing import List

from fastapi import Depends
from app.core.config import settings
from app.database.connection import get_store
from app.database.document_store import DocumentStore
from app.schemas.catalog import CategoryRef
from app.services.category_service import category_refs


async def get_category_refs(store: DocumentStore = Depends(get_store)) -> List[CategoryRef]:
    return await category_refs(store)


def get_databases() -> List[str]:
    return list(settings.CATALOG_DATABASES)
