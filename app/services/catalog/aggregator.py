"""Merged product listings across drafts and every live collection."""

import asyncio
from typing import Any, Dict, List, Optional, Sequence

from app.core.exceptions import InvalidPathError
from app.core.logging_config import get_logger
from app.database.document_store import DocumentStore
from app.enums.product_status import ProductStatus
from app.schemas.catalog import CategoryRef
from app.services.catalog.paths import DRAFTS, is_published, live_collection_path
from app.services.category_service import category_name_for, slugify
from app.services.timestamps import normalize_timestamp, timestamp_sort_key

logger = get_logger("catalog.aggregator")


def _categories_to_scan(categories: Sequence[CategoryRef], category: Optional[str]) -> List[CategoryRef]:
    if not category:
        return list(categories)
    selected = [ref for ref in categories if ref.slug == category]
    # a slug missing from the directory is still scanned; its collection may predate a rename
    return selected or [CategoryRef(name=category, slug=category)]


def _draft_matches(record: Dict[str, Any], db: Optional[str], category: Optional[str]) -> bool:
    if db and record.get("db") != db:
        return False
    if category and slugify(record.get("category") or "") != category:
        return False
    return True


async def aggregate_products(
    store: DocumentStore,
    categories: Sequence[CategoryRef],
    databases: Sequence[str],
    db: Optional[str] = None,
    category: Optional[str] = None,
    limit: Optional[int] = None,
    include_drafts: bool = True,
) -> List[Dict[str, Any]]:
    """Drafts plus live products, one entry per id, newest first.

    ``db`` and ``category`` (a slug or display name) narrow the scan;
    ``limit`` applies after sorting. A published record replaces a draft with
    the same id. Live collections that cannot be read contribute nothing; a
    failure reading ``drafts`` propagates.
    """
    category = slugify(category) if category else None
    refs = _categories_to_scan(categories, category)
    namespaces = [db] if db else list(databases)

    merged: Dict[str, Dict[str, Any]] = {}

    if include_drafts:
        for record in await store.query(DRAFTS):
            if not _draft_matches(record, db, category):
                continue
            slug = slugify(record["category"]) if record.get("category") else None
            merged[record["id"]] = {
                **record,
                "category": slug,
                "status": ProductStatus.draft.value,
                "category_name": category_name_for(slug, categories),
                "created_at": normalize_timestamp(record.get("created_at")),
            }

    scans = []
    for namespace in namespaces:
        for ref in refs:
            try:
                scans.append((namespace, ref, live_collection_path(namespace, ref.slug)))
            except InvalidPathError:
                logger.debug("Skipping category %r: slug %r is not a valid path segment", ref.name, ref.slug)

    results = await asyncio.gather(
        *(store.query(path) for _, _, path in scans),
        return_exceptions=True,
    )

    for (namespace, ref, _), result in zip(scans, results):
        if isinstance(result, BaseException):
            if not isinstance(result, Exception):
                raise result
            logger.debug("Skipping %s/%s: %s", namespace, ref.slug, result)
            continue
        for record in result:
            if not is_published(record):
                continue
            merged[record["id"]] = {
                **record,
                "db": namespace,
                "category": ref.slug,
                "category_name": ref.name,
                "created_at": normalize_timestamp(record.get("created_at")),
            }

    products = sorted(merged.values(), key=lambda r: timestamp_sort_key(r["created_at"]), reverse=True)
    if limit is not None:
        products = products[:limit]
    return products
