# Services Package
from .service_catalog_service import ServiceCatalogService
from .product_service import ProductService
from .brand_service import BrandService
from .stock_service import StockService
from .report_service import ReportService
from .user_service import UserService
from .notification_service import NotificationService

__all__ = [
    "ServiceCatalogService",
    "ProductService",
    "BrandService",
    "StockService",
    "ReportService",
    "UserService",
    "NotificationService",
]
