"""
Stock Schemas
"""
from pydantic import BaseModel, Field
from typing import Optional
from uuid import UUID
from decimal import Decimal

class StockInCreate(BaseModel):
    product_id: UUID
    brand_id: UUID
    quantity: int = Field(gt=0)
    price_per_unit: Decimal = Field(default=Decimal("0"), ge=0)
    comments: Optional[str] = None

class StockInUpdate(BaseModel):
    product_id: Optional[UUID] = None
    brand_id: Optional[UUID] = None
    quantity: Optional[int] = Field(default=None, gt=0)
    price_per_unit: Optional[Decimal] = Field(default=None, ge=0)
    comments: Optional[str] = None

class StockOutCreate(BaseModel):
    product_id: UUID
    brand_id: UUID
    quantity: int = Field(gt=0)
    comments: Optional[str] = None

class StockOutUpdate(BaseModel):
    product_id: Optional[UUID] = None
    brand_id: Optional[UUID] = None
    quantity: Optional[int] = Field(default=None, gt=0)
    comments: Optional[str] = None

class StockNotification(BaseModel):
    product_name: str = Field(min_length=1)
    current_stock: int
