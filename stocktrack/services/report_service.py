"""
Report Service - Current stock and dashboard figures
"""
from sqlalchemy.orm import Session
from sqlalchemy import func
from typing import Dict, List

from stocktrack.core import settings
from stocktrack.models import Service, Product, Brand, StockIn, StockOut

class ReportService:
    """Read-only stock reports"""
    
    @staticmethod
    def _totals_by(db: Session, key: str):
        """Subqueries of total stock in / out per brand_id or product_id"""
        stock_in = db.query(
            getattr(StockIn, key).label("ref_id"),
            func.sum(StockIn.quantity).label("total")
        ).group_by(getattr(StockIn, key)).subquery()
        
        stock_out = db.query(
            getattr(StockOut, key).label("ref_id"),
            func.sum(StockOut.quantity).label("total")
        ).group_by(getattr(StockOut, key)).subquery()
        
        return stock_in, stock_out
    
    @staticmethod
    def get_current_stock_by_brand(db: Session) -> List[Dict]:
        """One row per brand, sorted by brand name"""
        stock_in, stock_out = ReportService._totals_by(db, "brand_id")
        
        rows = db.query(
            Brand.id,
            Brand.name,
            Product.id,
            Product.name,
            Service.name,
            stock_in.c.total,
            stock_out.c.total
        ).join(Product, Brand.product_id == Product.id)\
            .join(Service, Product.service_id == Service.id)\
            .outerjoin(stock_in, stock_in.c.ref_id == Brand.id)\
            .outerjoin(stock_out, stock_out.c.ref_id == Brand.id)\
            .all()
        
        results = []
        for brand_id, brand_name, product_id, product_name, service_name, total_in, total_out in rows:
            total_in = int(total_in or 0)
            total_out = int(total_out or 0)
            results.append({
                "id": str(brand_id),
                "brand_name": brand_name,
                "product_id": str(product_id),
                "product_name": product_name,
                "service_name": service_name,
                "total_stock_in": total_in,
                "total_stock_out": total_out,
                "current_stock": total_in - total_out
            })
        
        results.sort(key=lambda r: r["brand_name"].lower())
        return results
    
    @staticmethod
    def get_current_stock_by_product(db: Session) -> List[Dict]:
        """One row per product across all its brands, sorted by product name"""
        stock_in, stock_out = ReportService._totals_by(db, "product_id")
        
        rows = db.query(
            Product.id,
            Product.name,
            Service.name,
            stock_in.c.total,
            stock_out.c.total
        ).join(Service, Product.service_id == Service.id)\
            .outerjoin(stock_in, stock_in.c.ref_id == Product.id)\
            .outerjoin(stock_out, stock_out.c.ref_id == Product.id)\
            .all()
        
        results = []
        for product_id, product_name, service_name, total_in, total_out in rows:
            total_in = int(total_in or 0)
            total_out = int(total_out or 0)
            results.append({
                "id": str(product_id),
                "product_name": product_name,
                "service_name": service_name,
                "total_stock_in": total_in,
                "total_stock_out": total_out,
                "current_stock": total_in - total_out
            })
        
        results.sort(key=lambda r: r["product_name"].lower())
        return results
    
    @staticmethod
    def is_low_stock(current_stock: int) -> bool:
        return current_stock <= settings.LOW_STOCK_THRESHOLD
    
    @staticmethod
    def get_quick_stats(db: Session) -> Dict:
        """Dashboard counters plus the per-brand current stock"""
        current_stock = ReportService.get_current_stock_by_brand(db)
        
        total_in = db.query(func.coalesce(func.sum(StockIn.quantity), 0)).scalar()
        total_out = db.query(func.coalesce(func.sum(StockOut.quantity), 0)).scalar()
        
        return {
            "total_services": db.query(Service).count(),
            "total_products": db.query(Product).count(),
            "total_brands": db.query(Brand).count(),
            "total_stock_in_entries": db.query(StockIn).count(),
            "total_stock_out_entries": db.query(StockOut).count(),
            "total_stock_in_quantity": int(total_in or 0),
            "total_stock_out_quantity": int(total_out or 0),
            "low_stock_products": sum(1 for row in current_stock if ReportService.is_low_stock(row["current_stock"])),
            "current_stock": current_stock
        }
