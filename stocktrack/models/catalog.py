"""
Catalog Models - Service, Product, Brand
"""
from sqlalchemy import Column, String, Numeric, ForeignKey, Text, Uuid
from sqlalchemy.orm import relationship
from stocktrack.core import Base
from .base import UUIDMixin, TimestampMixin

class Service(Base, UUIDMixin, TimestampMixin):
    """Service line grouping products"""
    __tablename__ = "service"
    
    name = Column(String(200), nullable=False, index=True)
    description = Column(Text)
    service_charge = Column(Numeric(12, 2), default=0)
    created_by_id = Column(Uuid(as_uuid=True), ForeignKey("app_user.id"), nullable=False)
    
    # Relationships
    created_by = relationship("AppUser", back_populates="services_created")
    products = relationship("Product", back_populates="service")

class Product(Base, UUIDMixin, TimestampMixin):
    """Product Master"""
    __tablename__ = "product"
    
    name = Column(String(300), nullable=False, index=True)
    description = Column(Text)
    service_id = Column(Uuid(as_uuid=True), ForeignKey("service.id"), nullable=False, index=True)
    created_by_id = Column(Uuid(as_uuid=True), ForeignKey("app_user.id"), nullable=False)
    
    # Relationships
    service = relationship("Service", back_populates="products")
    created_by = relationship("AppUser", back_populates="products_created")
    brands = relationship("Brand", back_populates="product")
    stock_ins = relationship("StockIn", back_populates="product")
    stock_outs = relationship("StockOut", back_populates="product")

class Brand(Base, UUIDMixin, TimestampMixin):
    """Brand of a product, the unit stock is tracked by"""
    __tablename__ = "brand"
    
    name = Column(String(200), nullable=False)
    product_id = Column(Uuid(as_uuid=True), ForeignKey("product.id"), nullable=False, index=True)
    
    # Relationships
    product = relationship("Product", back_populates="brands")
    stock_ins = relationship("StockIn", back_populates="brand")
    stock_outs = relationship("StockOut", back_populates="brand")
