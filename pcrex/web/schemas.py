from __future__ import annotations

from datetime import datetime
from typing import Any
from typing import List
from typing import Optional

from pydantic import BaseModel
from pydantic import Field


class ImageSource(BaseModel):
    uri: str


class ResolvedAssetOut(BaseModel):
    url: str
    kind: str
    source: ImageSource


class ResolveBatchRequest(BaseModel):
    # Stored values are untrusted; anything that is not a string resolves to the placeholder
    refs: List[Any] = Field(default_factory=list)


class ProductIn(BaseModel):
    name: str = Field(min_length=1)
    price: float = Field(ge=0)
    description: str = ""
    category: Optional[str] = None
    quantity: int = Field(default=0, ge=0)
    images: List[str] = Field(default_factory=list)


class ProductOut(BaseModel):
    id: int
    name: str
    description: str = ""
    price: float
    category: Optional[str] = None
    quantity: int = 0
    image: str
    images: List[str]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
