"""
Product Service - Business Logic for Products
"""
import logging
from sqlalchemy.orm import Session, joinedload
from typing import List, Optional
from uuid import UUID

from stocktrack.core.exceptions import ConflictError
from stocktrack.core.permissions import AuthContext
from stocktrack.models import Product, Service, Brand, StockIn, StockOut
from stocktrack.schemas.catalog import ProductCreate, ProductUpdate
from .lookups import get_or_404, find_name_conflict

logger = logging.getLogger(__name__)

DUPLICATE_MESSAGE = "A product with this name already exists"

class ProductService:
    """Product business logic"""
    
    @staticmethod
    def get_products(db: Session, service_id: Optional[UUID] = None) -> List[Product]:
        """Get products, optionally for one service"""
        query = db.query(Product).options(
            joinedload(Product.service),
            joinedload(Product.created_by)
        )
        
        if service_id:
            query = query.filter(Product.service_id == service_id)
        
        return query.order_by(Product.name).all()
    
    @staticmethod
    def get_product_by_id(db: Session, product_id: UUID) -> Product:
        return get_or_404(db, Product, product_id, "Product")
    
    @staticmethod
    def create_product(db: Session, data: ProductCreate, actor: AuthContext) -> Product:
        get_or_404(db, Service, data.service_id, "Service")
        
        if find_name_conflict(db, Product, data.name):
            raise ConflictError(DUPLICATE_MESSAGE)
        
        product = Product(
            name=data.name.strip(),
            description=data.description,
            service_id=data.service_id,
            created_by_id=actor.user_id
        )
        db.add(product)
        db.commit()
        db.refresh(product)
        logger.info(f"Product created: {product.name} by {actor.username}")
        return product
    
    @staticmethod
    def update_product(db: Session, product_id: UUID, data: ProductUpdate) -> Product:
        product = get_or_404(db, Product, product_id, "Product")
        
        if data.service_id is not None:
            get_or_404(db, Service, data.service_id, "Service")
        
        if data.name is not None and find_name_conflict(db, Product, data.name, exclude_id=product.id):
            raise ConflictError(DUPLICATE_MESSAGE)
        
        for field, value in data.model_dump(exclude_unset=True).items():
            if value is None and field in ("name", "service_id"):
                continue
            if field == "name":
                value = value.strip()
            setattr(product, field, value)
        
        db.commit()
        db.refresh(product)
        return product
    
    @staticmethod
    def delete_product(db: Session, product_id: UUID) -> None:
        """Delete a product; refused while brands or stock records reference it"""
        product = get_or_404(db, Product, product_id, "Product")
        
        if db.query(Brand).filter(Brand.product_id == product.id).first():
            raise ConflictError("Cannot delete product: it still has brands")
        if (db.query(StockIn).filter(StockIn.product_id == product.id).first()
                or db.query(StockOut).filter(StockOut.product_id == product.id).first()):
            raise ConflictError("Cannot delete product: it has stock records")
        
        db.delete(product)
        db.commit()
        logger.info(f"Product deleted: {product.name}")
