"""
Stock Transaction Models
"""
from sqlalchemy import Column, Integer, Numeric, DateTime, ForeignKey, Text, Uuid, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from stocktrack.core import Base
from .base import UUIDMixin

class StockIn(Base, UUIDMixin):
    """Purchase / receipt of stock"""
    __tablename__ = "stock_in"
    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_stock_in_quantity_positive"),
        CheckConstraint("price_per_unit >= 0", name="ck_stock_in_price_non_negative"),
    )
    
    product_id = Column(Uuid(as_uuid=True), ForeignKey("product.id"), nullable=False, index=True)
    brand_id = Column(Uuid(as_uuid=True), ForeignKey("brand.id"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False)
    price_per_unit = Column(Numeric(12, 2), nullable=False, default=0)
    comments = Column(Text)
    
    # Metadata
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    created_by_id = Column(Uuid(as_uuid=True), ForeignKey("app_user.id"), nullable=False)
    
    # Relationships
    product = relationship("Product", back_populates="stock_ins")
    brand = relationship("Brand", back_populates="stock_ins")
    created_by = relationship("AppUser", back_populates="stock_ins_created")

class StockOut(Base, UUIDMixin):
    """Sale / usage of stock"""
    __tablename__ = "stock_out"
    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_stock_out_quantity_positive"),
    )
    
    product_id = Column(Uuid(as_uuid=True), ForeignKey("product.id"), nullable=False, index=True)
    brand_id = Column(Uuid(as_uuid=True), ForeignKey("brand.id"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False)
    comments = Column(Text)
    
    # Metadata
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    created_by_id = Column(Uuid(as_uuid=True), ForeignKey("app_user.id"), nullable=False)
    
    # Relationships
    product = relationship("Product", back_populates="stock_outs")
    brand = relationship("Brand", back_populates="stock_outs")
    created_by = relationship("AppUser", back_populates="stock_outs_created")
