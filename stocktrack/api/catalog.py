"""
Catalog API - Services, Products, Brands
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional
from uuid import UUID

from stocktrack.core import get_db
from stocktrack.core.permissions import AuthContext, Feature, Action
from stocktrack.models import Service, Product, Brand
from stocktrack.schemas.catalog import (
    ServiceCreate, ServiceUpdate, ProductCreate, ProductUpdate, BrandCreate, BrandUpdate
)
from stocktrack.services import ServiceCatalogService, ProductService, BrandService
from .auth import get_current_active_user, require_permission, require_super_admin

services_router = APIRouter(prefix="/services", tags=["services"])
products_router = APIRouter(prefix="/products", tags=["products"])
brands_router = APIRouter(prefix="/brands", tags=["brands"])


def service_to_dict(s: Service) -> dict:
    return {
        "id": str(s.id),
        "name": s.name,
        "description": s.description,
        "service_charge": float(s.service_charge or 0),
        "created_by": s.created_by.username if s.created_by else None,
        "created_at": s.created_at.isoformat() if s.created_at else None
    }


def product_to_dict(p: Product) -> dict:
    return {
        "id": str(p.id),
        "name": p.name,
        "description": p.description,
        "service_id": str(p.service_id),
        "service_name": p.service.name if p.service else None,
        "created_by": p.created_by.username if p.created_by else None,
        "created_at": p.created_at.isoformat() if p.created_at else None
    }


def brand_to_dict(b: Brand) -> dict:
    return {
        "id": str(b.id),
        "name": b.name,
        "product_id": str(b.product_id),
        "product_name": b.product.name if b.product else None,
        "service_name": b.product.service.name if b.product and b.product.service else None
    }


# ===================== SERVICES =====================

@services_router.get("")
def list_services(
    db: Session = Depends(get_db),
    actor: AuthContext = Depends(get_current_active_user)
):
    return [service_to_dict(s) for s in ServiceCatalogService.get_services(db)]

@services_router.post("")
def create_service(
    data: ServiceCreate,
    db: Session = Depends(get_db),
    actor: AuthContext = Depends(require_permission(Feature.SERVICE, Action.CREATE))
):
    return service_to_dict(ServiceCatalogService.create_service(db, data, actor))

@services_router.put("/{service_id}")
def update_service(
    service_id: UUID,
    data: ServiceUpdate,
    db: Session = Depends(get_db),
    actor: AuthContext = Depends(require_permission(Feature.SERVICE, Action.EDIT))
):
    return service_to_dict(ServiceCatalogService.update_service(db, service_id, data))

@services_router.delete("/{service_id}")
def delete_service(
    service_id: UUID,
    db: Session = Depends(get_db),
    actor: AuthContext = Depends(require_permission(Feature.SERVICE, Action.DELETE))
):
    ServiceCatalogService.delete_service(db, service_id)
    return {"message": "Service deleted successfully"}


# ===================== PRODUCTS =====================

@products_router.get("")
def list_products(
    service_id: Optional[UUID] = Query(None),
    db: Session = Depends(get_db),
    actor: AuthContext = Depends(get_current_active_user)
):
    return [product_to_dict(p) for p in ProductService.get_products(db, service_id)]

@products_router.get("/{product_id}")
def get_product(
    product_id: UUID,
    db: Session = Depends(get_db),
    actor: AuthContext = Depends(get_current_active_user)
):
    return product_to_dict(ProductService.get_product_by_id(db, product_id))

@products_router.post("")
def create_product(
    data: ProductCreate,
    db: Session = Depends(get_db),
    actor: AuthContext = Depends(require_permission(Feature.PRODUCT, Action.CREATE))
):
    return product_to_dict(ProductService.create_product(db, data, actor))

@products_router.put("/{product_id}")
def update_product(
    product_id: UUID,
    data: ProductUpdate,
    db: Session = Depends(get_db),
    actor: AuthContext = Depends(require_permission(Feature.PRODUCT, Action.EDIT))
):
    return product_to_dict(ProductService.update_product(db, product_id, data))

@products_router.delete("/{product_id}")
def delete_product(
    product_id: UUID,
    db: Session = Depends(get_db),
    actor: AuthContext = Depends(require_permission(Feature.PRODUCT, Action.DELETE))
):
    ProductService.delete_product(db, product_id)
    return {"message": "Product deleted successfully"}


# ===================== BRANDS =====================

@brands_router.get("")
def list_brands(
    product_id: Optional[UUID] = Query(None),
    db: Session = Depends(get_db),
    actor: AuthContext = Depends(get_current_active_user)
):
    return [brand_to_dict(b) for b in BrandService.get_brands(db, product_id)]

@brands_router.post("")
def create_brand(
    data: BrandCreate,
    db: Session = Depends(get_db),
    actor: AuthContext = Depends(require_super_admin)
):
    return brand_to_dict(BrandService.create_brand(db, data))

@brands_router.put("/{brand_id}")
def update_brand(
    brand_id: UUID,
    data: BrandUpdate,
    db: Session = Depends(get_db),
    actor: AuthContext = Depends(require_super_admin)
):
    return brand_to_dict(BrandService.update_brand(db, brand_id, data))

@brands_router.delete("/{brand_id}")
def delete_brand(
    brand_id: UUID,
    db: Session = Depends(get_db),
    actor: AuthContext = Depends(require_super_admin)
):
    BrandService.delete_brand(db, brand_id)
    return {"message": "Brand deleted successfully"}
