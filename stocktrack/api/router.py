"""
API Router - JSON Endpoints
"""
from fastapi import APIRouter

from . import auth, users, catalog, stock, reporting, notifications

api_router = APIRouter(tags=["API"])

# Include sub-routers
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(users.profile_router)
api_router.include_router(catalog.services_router)
api_router.include_router(catalog.products_router)
api_router.include_router(catalog.brands_router)
api_router.include_router(stock.stock_in_router)
api_router.include_router(stock.stock_out_router)
api_router.include_router(stock.stock_router)
api_router.include_router(reporting.router)
api_router.include_router(notifications.router)
