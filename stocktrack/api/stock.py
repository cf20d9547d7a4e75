"""
Stock API - Stock in, stock out, availability
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from uuid import UUID

from stocktrack.core import get_db
from stocktrack.core.exceptions import InvalidInputError
from stocktrack.core.permissions import AuthContext, Feature, Action
from stocktrack.models import StockIn, StockOut
from stocktrack.schemas.stock import StockInCreate, StockInUpdate, StockOutCreate, StockOutUpdate
from stocktrack.services import StockService
from .auth import get_current_active_user, require_permission

stock_in_router = APIRouter(prefix="/stock-in", tags=["stock"])
stock_out_router = APIRouter(prefix="/stock-out", tags=["stock"])
stock_router = APIRouter(prefix="/stock", tags=["stock"])


def _movement_to_dict(m) -> dict:
    return {
        "id": str(m.id),
        "product_id": str(m.product_id),
        "product_name": m.product.name if m.product else None,
        "service_name": m.product.service.name if m.product and m.product.service else None,
        "brand_id": str(m.brand_id),
        "brand_name": m.brand.name if m.brand else None,
        "quantity": m.quantity,
        "comments": m.comments,
        "created_by": m.created_by.username if m.created_by else None,
        "created_at": m.created_at.isoformat() if m.created_at else None
    }


def stock_in_to_dict(s: StockIn) -> dict:
    result = _movement_to_dict(s)
    result["price_per_unit"] = float(s.price_per_unit or 0)
    return result


def stock_out_to_dict(s: StockOut) -> dict:
    return _movement_to_dict(s)


# ===================== STOCK IN =====================

@stock_in_router.get("")
def list_stock_ins(
    db: Session = Depends(get_db),
    actor: AuthContext = Depends(get_current_active_user)
):
    return [stock_in_to_dict(s) for s in StockService.get_stock_ins(db)]

@stock_in_router.post("")
def create_stock_in(
    data: StockInCreate,
    db: Session = Depends(get_db),
    actor: AuthContext = Depends(require_permission(Feature.STOCK_IN, Action.CREATE))
):
    return stock_in_to_dict(StockService.create_stock_in(db, data, actor))

@stock_in_router.put("/{stock_in_id}")
def update_stock_in(
    stock_in_id: UUID,
    data: StockInUpdate,
    db: Session = Depends(get_db),
    actor: AuthContext = Depends(require_permission(Feature.STOCK_IN, Action.EDIT))
):
    return stock_in_to_dict(StockService.update_stock_in(db, stock_in_id, data))

@stock_in_router.delete("/{stock_in_id}")
def delete_stock_in(
    stock_in_id: UUID,
    db: Session = Depends(get_db),
    actor: AuthContext = Depends(require_permission(Feature.STOCK_IN, Action.DELETE))
):
    StockService.delete_stock_in(db, stock_in_id)
    return {"message": "Stock in deleted successfully"}


# ===================== STOCK OUT =====================

@stock_out_router.get("")
def list_stock_outs(
    db: Session = Depends(get_db),
    actor: AuthContext = Depends(get_current_active_user)
):
    return [stock_out_to_dict(s) for s in StockService.get_stock_outs(db)]

@stock_out_router.post("")
def create_stock_outs(
    items: List[StockOutCreate],
    db: Session = Depends(get_db),
    actor: AuthContext = Depends(require_permission(Feature.STOCK_OUT, Action.CREATE))
):
    """Record one or more stock outs; all are rejected if any exceeds availability"""
    return [stock_out_to_dict(s) for s in StockService.create_stock_outs(db, items, actor)]

@stock_out_router.put("/{stock_out_id}")
def update_stock_out(
    stock_out_id: UUID,
    data: StockOutUpdate,
    db: Session = Depends(get_db),
    actor: AuthContext = Depends(require_permission(Feature.STOCK_OUT, Action.EDIT))
):
    return stock_out_to_dict(StockService.update_stock_out(db, stock_out_id, data, actor))

@stock_out_router.delete("/{stock_out_id}")
def delete_stock_out(
    stock_out_id: UUID,
    db: Session = Depends(get_db),
    actor: AuthContext = Depends(require_permission(Feature.STOCK_OUT, Action.DELETE))
):
    StockService.delete_stock_out(db, stock_out_id)
    return {"message": "Stock out deleted successfully"}


# ===================== AVAILABILITY =====================

@stock_router.get("/available")
def available_stock(
    product_id: Optional[UUID] = Query(None),
    brand_id: Optional[UUID] = Query(None),
    db: Session = Depends(get_db)
):
    if not product_id:
        raise InvalidInputError("Product ID is required")
    return {"available_stock": StockService.available_stock(db, product_id, brand_id)}
