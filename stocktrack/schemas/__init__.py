# Pydantic Schemas Package
from .catalog import ServiceCreate, ServiceUpdate, ProductCreate, ProductUpdate, BrandCreate, BrandUpdate
from .stock import StockInCreate, StockInUpdate, StockOutCreate, StockOutUpdate, StockNotification
from .user import LoginRequest, PasswordChange, UserCreate, UserUpdate, ProfileUpdate

__all__ = [
    "ServiceCreate", "ServiceUpdate", "ProductCreate", "ProductUpdate", "BrandCreate", "BrandUpdate",
    "StockInCreate", "StockInUpdate", "StockOutCreate", "StockOutUpdate", "StockNotification",
    "LoginRequest", "PasswordChange", "UserCreate", "UserUpdate", "ProfileUpdate",
]
