"""
Service Catalog - Business Logic for Services
"""
import logging
from sqlalchemy.orm import Session, joinedload
from typing import List
from uuid import UUID

from stocktrack.core.exceptions import ConflictError
from stocktrack.core.permissions import AuthContext
from stocktrack.models import Service, Product
from stocktrack.schemas.catalog import ServiceCreate, ServiceUpdate
from .lookups import get_or_404, find_name_conflict

logger = logging.getLogger(__name__)

DUPLICATE_MESSAGE = "A service with this name already exists"

class ServiceCatalogService:
    """Service (offering category) business logic"""
    
    @staticmethod
    def get_services(db: Session) -> List[Service]:
        return db.query(Service).options(joinedload(Service.created_by)).order_by(Service.name).all()
    
    @staticmethod
    def create_service(db: Session, data: ServiceCreate, actor: AuthContext) -> Service:
        if find_name_conflict(db, Service, data.name):
            raise ConflictError(DUPLICATE_MESSAGE)
        
        service = Service(
            name=data.name.strip(),
            description=data.description,
            service_charge=data.service_charge,
            created_by_id=actor.user_id
        )
        db.add(service)
        db.commit()
        db.refresh(service)
        logger.info(f"Service created: {service.name} by {actor.username}")
        return service
    
    @staticmethod
    def update_service(db: Session, service_id: UUID, data: ServiceUpdate) -> Service:
        service = get_or_404(db, Service, service_id, "Service")
        
        if data.name is not None and find_name_conflict(db, Service, data.name, exclude_id=service.id):
            raise ConflictError(DUPLICATE_MESSAGE)
        
        for field, value in data.model_dump(exclude_unset=True).items():
            if field == "name":
                if value is None:
                    continue
                value = value.strip()
            setattr(service, field, value)
        
        db.commit()
        db.refresh(service)
        return service
    
    @staticmethod
    def delete_service(db: Session, service_id: UUID) -> None:
        """Delete a service; refused while products still belong to it"""
        service = get_or_404(db, Service, service_id, "Service")
        
        product_count = db.query(Product).filter(Product.service_id == service.id).count()
        if product_count:
            raise ConflictError(f"Cannot delete service: {product_count} product(s) still belong to it")
        
        db.delete(service)
        db.commit()
        logger.info(f"Service deleted: {service.name}")
