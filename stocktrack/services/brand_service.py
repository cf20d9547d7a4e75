"""
Brand Service - Business Logic for Brands
"""
import logging
from sqlalchemy.orm import Session, joinedload
from typing import List, Optional
from uuid import UUID

from stocktrack.core.exceptions import ConflictError
from stocktrack.models import Brand, Product, StockIn, StockOut
from stocktrack.schemas.catalog import BrandCreate, BrandUpdate
from .lookups import get_or_404, find_name_conflict

logger = logging.getLogger(__name__)

DUPLICATE_MESSAGE = "A brand with this name already exists"

class BrandService:
    """Brand business logic. Names are unique within a product."""
    
    @staticmethod
    def get_brands(db: Session, product_id: Optional[UUID] = None) -> List[Brand]:
        query = db.query(Brand).options(joinedload(Brand.product).joinedload(Product.service))
        if product_id:
            query = query.filter(Brand.product_id == product_id)
        return query.order_by(Brand.name).all()
    
    @staticmethod
    def create_brand(db: Session, data: BrandCreate) -> Brand:
        get_or_404(db, Product, data.product_id, "Product")
        
        if find_name_conflict(db, Brand, data.name, product_id=data.product_id):
            raise ConflictError(DUPLICATE_MESSAGE)
        
        brand = Brand(name=data.name.strip(), product_id=data.product_id)
        db.add(brand)
        db.commit()
        db.refresh(brand)
        logger.info(f"Brand created: {brand.name}")
        return brand
    
    @staticmethod
    def update_brand(db: Session, brand_id: UUID, data: BrandUpdate) -> Brand:
        brand = get_or_404(db, Brand, brand_id, "Brand")
        
        if find_name_conflict(db, Brand, data.name, exclude_id=brand.id, product_id=brand.product_id):
            raise ConflictError(DUPLICATE_MESSAGE)
        
        brand.name = data.name.strip()
        db.commit()
        db.refresh(brand)
        return brand
    
    @staticmethod
    def delete_brand(db: Session, brand_id: UUID) -> None:
        brand = get_or_404(db, Brand, brand_id, "Brand")
        
        if (db.query(StockIn).filter(StockIn.brand_id == brand.id).first()
                or db.query(StockOut).filter(StockOut.brand_id == brand.id).first()):
            raise ConflictError("Cannot delete brand: it has stock records")
        
        db.delete(brand)
        db.commit()
        logger.info(f"Brand deleted: {brand.name}")
