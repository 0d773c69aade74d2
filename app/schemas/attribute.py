from pydantic import BaseModel, Field
from typing import List, Optional


class AttributeBase(BaseModel):
    name: str = Field(..., min_length=1)
    category: str
    values: List[str] = Field(..., min_length=1)


class AttributeCreate(AttributeBase):
    pass


class AttributeUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = None
    values: Optional[List[str]] = Field(None, min_length=1)


class AttributeResponse(AttributeBase):
    id: str
