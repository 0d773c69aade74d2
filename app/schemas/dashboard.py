from pydantic import BaseModel
from typing import List
from app.schemas.product import ProductResponse


class DashboardResponse(BaseModel):
    total_products: int
    published_products: int
    draft_products: int
    total_categories: int
    total_users: int
    recent_products: List[ProductResponse] = []
