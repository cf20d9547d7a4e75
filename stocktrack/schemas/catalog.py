"""
Catalog Schemas - Service, Product, Brand
"""
from pydantic import BaseModel, Field
from typing import Optional
from uuid import UUID
from decimal import Decimal

class ServiceCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    description: Optional[str] = None
    service_charge: Decimal = Field(default=Decimal("0"), ge=0)

class ServiceUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = None
    service_charge: Optional[Decimal] = Field(default=None, ge=0)

class ProductCreate(BaseModel):
    name: str = Field(min_length=1, max_length=300)
    description: Optional[str] = None
    service_id: UUID

class ProductUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=300)
    description: Optional[str] = None
    service_id: Optional[UUID] = None

class BrandCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    product_id: UUID

class BrandUpdate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
