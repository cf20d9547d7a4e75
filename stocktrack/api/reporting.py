"""
Reporting API - Current stock and quick stats
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from stocktrack.core import get_db
from stocktrack.core.permissions import AuthContext
from stocktrack.services import ReportService
from .auth import get_current_active_user

router = APIRouter(tags=["reports"])

@router.get("/current-stock")
def current_stock(
    scope: str = Query("brand", pattern="^(brand|product)$"),
    db: Session = Depends(get_db),
    actor: AuthContext = Depends(get_current_active_user)
):
    if scope == "product":
        return ReportService.get_current_stock_by_product(db)
    return ReportService.get_current_stock_by_brand(db)

@router.get("/quick-stats")
def quick_stats(
    db: Session = Depends(get_db),
    actor: AuthContext = Depends(get_current_active_user)
):
    return ReportService.get_quick_stats(db)
