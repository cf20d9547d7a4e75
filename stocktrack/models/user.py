"""
User Account Model
"""
from sqlalchemy import Column, String, Boolean, Date, JSON
from sqlalchemy.orm import relationship
from stocktrack.core import Base
from stocktrack.core.permissions import Role
from .base import UUIDMixin, TimestampMixin

class AppUser(Base, UUIDMixin, TimestampMixin):
    """Back-office user"""
    __tablename__ = "app_user"
    
    employee_id = Column(String(50))
    username = Column(String(100), nullable=False)
    email = Column(String(200), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    phone_number = Column(String(30))
    nid_number = Column(String(50))
    job_start_date = Column(Date)
    job_end_date = Column(Date)
    is_active = Column(Boolean, default=True, nullable=False)
    role = Column(String(20), default=Role.NORMAL_ADMIN.value, nullable=False)  # SUPER_ADMIN, NORMAL_ADMIN
    permissions = Column(JSON, default=dict)  # {"service": ["view", "create"], ...}
    
    # Relationships
    services_created = relationship("Service", back_populates="created_by")
    products_created = relationship("Product", back_populates="created_by")
    stock_ins_created = relationship("StockIn", back_populates="created_by")
    stock_outs_created = relationship("StockOut", back_populates="created_by")
