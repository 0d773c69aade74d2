from typing import Sequence

from app.database.document_store import DocumentStore
from app.enums.product_status import ProductStatus
from app.schemas.catalog import CategoryRef
from app.schemas.dashboard import DashboardResponse
from app.services.catalog.aggregator import aggregate_products
from app.services.category_service import CATEGORIES
from app.services.product_service import to_response
from app.services.user_service import USERS

RECENT_LIMIT = 5


async def dashboard_summary(
    store: DocumentStore,
    categories: Sequence[CategoryRef],
    databases: Sequence[str],
) -> DashboardResponse:
    products = await aggregate_products(store, categories, databases)
    published = sum(1 for p in products if p.get("status") == ProductStatus.published.value)

    return DashboardResponse(
        total_products=len(products),
        published_products=published,
        draft_products=len(products) - published,
        total_categories=await store.count(CATEGORIES),
        total_users=await store.count(USERS),
        recent_products=[to_response(p, categories) for p in products[:RECENT_LIMIT]],
    )
