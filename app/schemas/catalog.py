from pydantic import BaseModel
from typing import Any, Dict, List, Optional
from app.enums.product_status import ProductStatus


class CategoryRef(BaseModel):
    """A category as the fan-out sees it: display name plus derived path slug."""
    name: str
    slug: str


class LocatedProduct(BaseModel):
    record: Dict[str, Any]
    status: ProductStatus
    db: Optional[str] = None
    category: Optional[str] = None
    path: str
    # other locations holding the same id, left behind by an interrupted transition
    duplicates: List[str] = []


class UnpublishRequest(BaseModel):
    db: str
    category: str


class TransitionResult(BaseModel):
    success: bool = True
    action: str
    product_id: str
    source: str
    destination: str
    message: str
