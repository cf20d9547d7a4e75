"""
Shared query helpers for services
"""
from sqlalchemy import func
from sqlalchemy.orm import Session
from typing import Optional, Type
from uuid import UUID

from stocktrack.core.exceptions import NotFoundError


def get_or_404(db: Session, model: Type, record_id: UUID, label: str):
    """Fetch a record by primary key or raise NotFoundError('<label> not found')"""
    record = db.query(model).filter(model.id == record_id).first()
    if not record:
        raise NotFoundError(f"{label} not found")
    return record


def find_name_conflict(
    db: Session,
    model: Type,
    name: str,
    exclude_id: Optional[UUID] = None,
    **scope
):
    """Case-insensitive name lookup, excluding the record being updated"""
    query = db.query(model).filter(func.lower(model.name) == func.lower(name.strip()))
    for column, value in scope.items():
        query = query.filter(getattr(model, column) == value)
    if exclude_id is not None:
        query = query.filter(model.id != exclude_id)
    return query.first()
