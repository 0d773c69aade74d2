from pydantic import BaseModel, Field
from typing import Dict, List, Optional, Union
from app.enums.product_status import ProductStatus, StockStatus

PLACEHOLDER_IMAGE = "https://placehold.co/600x600"

AttributeValue = Union[str, List[str]]


class ProductBase(BaseModel):
    title: str
    code: Optional[str] = None
    description: Optional[str] = None
    price: float = Field(0, ge=0)
    images: List[str] = []
    additional_images: List[str] = []
    specifications: Optional[str] = None
    attributes: Dict[str, AttributeValue] = {}
    stock: int = Field(0, ge=0)
    stock_status: StockStatus = StockStatus.in_stock


class ProductCreate(ProductBase):
    db: str
    category: str


class ProductUpdate(BaseModel):
    title: Optional[str] = None
    code: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    images: Optional[List[str]] = None
    additional_images: Optional[List[str]] = None
    specifications: Optional[str] = None
    attributes: Optional[Dict[str, AttributeValue]] = None
    stock: Optional[int] = Field(None, ge=0)
    stock_status: Optional[StockStatus] = None


class ProductResponse(BaseModel):
    id: str
    title: Optional[str] = None
    code: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    images: List[str] = []
    additional_images: List[str] = []
    image_url: str = PLACEHOLDER_IMAGE
    specifications: Optional[str] = None
    attributes: Dict[str, AttributeValue] = {}
    stock: Optional[int] = None
    stock_status: Optional[str] = None
    status: ProductStatus = ProductStatus.draft
    db: Optional[str] = None
    category: Optional[str] = None
    category_name: Optional[str] = None
    created_at: str

    class Config:
        extra = "ignore"


class SpecificationItem(BaseModel):
    key: str
    value: str = ""


class ProductDetailResponse(BaseModel):
    product: ProductResponse
    specifications: List[SpecificationItem] = []
    related: List[ProductResponse] = []


class ProductListResponse(BaseModel):
    items: List[ProductResponse]
    total: int
