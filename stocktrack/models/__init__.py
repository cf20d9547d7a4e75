from .base import TimestampMixin, UUIDMixin
from .user import AppUser
from .catalog import Service, Product, Brand
from .stock import StockIn, StockOut

__all__ = [
    # Base
    "TimestampMixin", "UUIDMixin",
    # Users
    "AppUser",
    # Catalog
    "Service", "Product", "Brand",
    # Stock
    "StockIn", "StockOut",
]
