"""
Stock Service - Business Logic for Inventory

Current stock is never stored: it is the sum of StockIn quantities minus the
sum of StockOut quantities for a product, optionally narrowed to one brand.
Stock-out writes lock the brand rows involved (the whole database on SQLite)
so the availability check and the write happen in one transaction.
"""
import logging
from collections import defaultdict
from sqlalchemy.orm import Session, joinedload
from sqlalchemy import func
from typing import Dict, Iterable, List, Optional, Tuple
from uuid import UUID

from stocktrack.core.database import begin_write_lock
from stocktrack.core.exceptions import InsufficientStockError, InvalidInputError, NotFoundError
from stocktrack.core.permissions import AuthContext
from stocktrack.models import StockIn, StockOut, Product, Brand
from stocktrack.schemas.stock import StockInCreate, StockInUpdate, StockOutCreate, StockOutUpdate
from .lookups import get_or_404

logger = logging.getLogger(__name__)

Scope = Tuple[UUID, UUID]

class StockService:
    """Stock/Inventory business logic"""
    
    # ===================== AGGREGATION =====================
    
    @staticmethod
    def available_stock(db: Session, product_id: UUID, brand_id: Optional[UUID] = None) -> int:
        """
        Stock in minus stock out for a product, across all brands unless
        brand_id is given. Not floored at zero: a negative result means the
        scope is already over-drawn.
        """
        stock_in = db.query(func.coalesce(func.sum(StockIn.quantity), 0)).filter(StockIn.product_id == product_id)
        stock_out = db.query(func.coalesce(func.sum(StockOut.quantity), 0)).filter(StockOut.product_id == product_id)
        
        if brand_id is not None:
            stock_in = stock_in.filter(StockIn.brand_id == brand_id)
            stock_out = stock_out.filter(StockOut.brand_id == brand_id)
        
        return int(stock_in.scalar() or 0) - int(stock_out.scalar() or 0)
    
    @staticmethod
    def _lock_brands(db: Session, brand_ids: Iterable[UUID]) -> Dict[UUID, Brand]:
        """SELECT ... FOR UPDATE on the brand rows, in id order to avoid deadlocks"""
        ids = sorted(set(brand_ids), key=str)
        brands = db.query(Brand).filter(Brand.id.in_(ids)).order_by(Brand.id).with_for_update().all()
        return {b.id: b for b in brands}
    
    @staticmethod
    def _check_scope(db: Session, product_id: UUID, brand: Optional[Brand]) -> None:
        get_or_404(db, Product, product_id, "Product")
        if brand is None:
            raise NotFoundError("Brand not found")
        if brand.product_id != product_id:
            raise InvalidInputError("Brand does not belong to the selected product")
    
    # ===================== STOCK IN =====================
    
    @staticmethod
    def get_stock_ins(db: Session) -> List[StockIn]:
        return db.query(StockIn).options(
            joinedload(StockIn.product).joinedload(Product.service),
            joinedload(StockIn.brand),
            joinedload(StockIn.created_by)
        ).order_by(StockIn.created_at.desc()).all()
    
    @staticmethod
    def create_stock_in(db: Session, data: StockInCreate, actor: AuthContext) -> StockIn:
        brand = db.query(Brand).filter(Brand.id == data.brand_id).first()
        StockService._check_scope(db, data.product_id, brand)
        
        stock_in = StockIn(
            product_id=data.product_id,
            brand_id=data.brand_id,
            quantity=data.quantity,
            price_per_unit=data.price_per_unit,
            comments=data.comments,
            created_by_id=actor.user_id
        )
        db.add(stock_in)
        db.commit()
        db.refresh(stock_in)
        logger.info(f"Stock in: product={data.product_id} brand={data.brand_id} qty={data.quantity} by {actor.username}")
        return stock_in
    
    @staticmethod
    def update_stock_in(db: Session, stock_in_id: UUID, data: StockInUpdate) -> StockIn:
        stock_in = get_or_404(db, StockIn, stock_in_id, "Stock in")
        fields = {k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None or k == "comments"}
        
        product_id = fields.get("product_id", stock_in.product_id)
        brand_id = fields.get("brand_id", stock_in.brand_id)
        if product_id != stock_in.product_id or brand_id != stock_in.brand_id:
            brand = db.query(Brand).filter(Brand.id == brand_id).first()
            StockService._check_scope(db, product_id, brand)
        
        for field, value in fields.items():
            setattr(stock_in, field, value)
        
        db.commit()
        db.refresh(stock_in)
        return stock_in
    
    @staticmethod
    def delete_stock_in(db: Session, stock_in_id: UUID) -> None:
        stock_in = get_or_404(db, StockIn, stock_in_id, "Stock in")
        db.delete(stock_in)
        db.commit()
        logger.info(f"Stock in deleted: {stock_in_id}")
    
    # ===================== STOCK OUT =====================
    
    @staticmethod
    def get_stock_outs(db: Session) -> List[StockOut]:
        return db.query(StockOut).options(
            joinedload(StockOut.product).joinedload(Product.service),
            joinedload(StockOut.brand),
            joinedload(StockOut.created_by)
        ).order_by(StockOut.created_at.desc()).all()
    
    @staticmethod
    def create_stock_outs(db: Session, items: List[StockOutCreate], actor: AuthContext) -> List[StockOut]:
        """
        Record several stock outs at once. Either every item is written or
        none is: quantities for the same product/brand are added together
        before being checked against availability.
        """
        if not items:
            raise InvalidInputError("At least one stock out item is required")
        
        try:
            begin_write_lock(db)
            brands = StockService._lock_brands(db, (item.brand_id for item in items))
            
            requested: Dict[Scope, int] = defaultdict(int)
            for item in items:
                StockService._check_scope(db, item.product_id, brands.get(item.brand_id))
                requested[(item.product_id, item.brand_id)] += item.quantity
            
            for (product_id, brand_id), quantity in requested.items():
                available = StockService.available_stock(db, product_id, brand_id)
                if quantity > available:
                    logger.warning(
                        f"Stock out rejected: product={product_id} brand={brand_id} "
                        f"available={available} requested={quantity}"
                    )
                    raise InsufficientStockError(available, quantity)
            
            stock_outs = [
                StockOut(
                    product_id=item.product_id,
                    brand_id=item.brand_id,
                    quantity=item.quantity,
                    comments=item.comments,
                    created_by_id=actor.user_id
                )
                for item in items
            ]
            db.add_all(stock_outs)
            db.commit()
        except Exception:
            db.rollback()
            raise
        
        for stock_out in stock_outs:
            db.refresh(stock_out)
        logger.info(f"Stock out: {len(stock_outs)} item(s) by {actor.username}")
        return stock_outs
    
    @staticmethod
    def create_stock_out(
        db: Session,
        product_id: UUID,
        brand_id: UUID,
        quantity: int,
        comments: Optional[str],
        actor: AuthContext
    ) -> StockOut:
        item = StockOutCreate(product_id=product_id, brand_id=brand_id, quantity=quantity, comments=comments)
        return StockService.create_stock_outs(db, [item], actor)[0]
    
    @staticmethod
    def update_stock_out(
        db: Session,
        stock_out_id: UUID,
        data: StockOutUpdate,
        actor: Optional[AuthContext] = None
    ) -> StockOut:
        """
        Update a stock out. Within the same product/brand only the increase
        over the old quantity has to be available; moving the record to
        another product/brand requires the whole quantity there.
        """
        try:
            begin_write_lock(db)
            stock_out = get_or_404(db, StockOut, stock_out_id, "Stock out")
            fields = data.model_dump(exclude_unset=True)
            
            product_id = fields.get("product_id") or stock_out.product_id
            brand_id = fields.get("brand_id")
            if brand_id is None:
                if product_id != stock_out.product_id:
                    raise InvalidInputError("brand_id is required when changing the product")
                brand_id = stock_out.brand_id
            quantity = fields.get("quantity") or stock_out.quantity
            
            brands = StockService._lock_brands(db, [brand_id])
            StockService._check_scope(db, product_id, brands.get(brand_id))
            
            available = StockService.available_stock(db, product_id, brand_id)
            if (product_id, brand_id) == (stock_out.product_id, stock_out.brand_id):
                delta = quantity - stock_out.quantity
                if delta > 0 and delta > available:
                    logger.warning(f"Stock out update rejected: {stock_out_id} available={available} additional={delta}")
                    raise InsufficientStockError(available, delta, additional=True)
            elif quantity > available:
                logger.warning(f"Stock out update rejected: {stock_out_id} available={available} requested={quantity}")
                raise InsufficientStockError(available, quantity)
            
            stock_out.product_id = product_id
            stock_out.brand_id = brand_id
            stock_out.quantity = quantity
            if "comments" in fields:
                stock_out.comments = fields["comments"]
            db.commit()
        except Exception:
            db.rollback()
            raise
        
        db.refresh(stock_out)
        if actor:
            logger.info(f"Stock out updated: {stock_out_id} qty={stock_out.quantity} by {actor.username}")
        return stock_out
    
    @staticmethod
    def delete_stock_out(db: Session, stock_out_id: UUID) -> None:
        stock_out = get_or_404(db, StockOut, stock_out_id, "Stock out")
        db.delete(stock_out)
        db.commit()
        logger.info(f"Stock out deleted: {stock_out_id}")
