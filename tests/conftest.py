import os
import sys

import pytest
from decimal import Decimal

# In-memory database for the whole test session, set before settings load
os.environ["DATABASE_URI"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["ALERT_RECIPIENT"] = "owner@example.com"
os.environ.pop("SUPER_ADMIN_EMAIL", None)

# ensure project root is on sys.path when running from tests/ folder
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from fastapi.testclient import TestClient

from main import app
from stocktrack.core import Base, engine, SessionLocal
from stocktrack.core.permissions import AuthContext, Role
from stocktrack.core.security import create_access_token, get_password_hash
from stocktrack.models import AppUser, Service, Product, Brand, StockIn

PASSWORD = "secret123"


@pytest.fixture(autouse=True)
def tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def make_user(db):
    def _make(email, role=Role.NORMAL_ADMIN, permissions=None, is_active=True, username=None):
        user = AppUser(
            username=username or email.split("@")[0],
            email=email,
            hashed_password=get_password_hash(PASSWORD),
            role=role.value,
            permissions=permissions or {},
            is_active=is_active
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make


def headers_for(user):
    token = create_access_token({"sub": str(user.id), "username": user.username, "role": user.role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def super_admin(make_user):
    return make_user("boss@example.com", role=Role.SUPER_ADMIN)


@pytest.fixture
def admin_headers(super_admin):
    return headers_for(super_admin)


@pytest.fixture
def actor(super_admin):
    return AuthContext.from_user(super_admin)


@pytest.fixture
def catalog(db, super_admin):
    """Hair Care -> Shampoo -> Dove, no stock yet"""
    service = Service(name="Hair Care", description="Salon hair services", created_by_id=super_admin.id)
    db.add(service)
    db.flush()
    product = Product(name="Shampoo", service_id=service.id, created_by_id=super_admin.id)
    db.add(product)
    db.flush()
    brand = Brand(name="Dove", product_id=product.id)
    db.add(brand)
    db.commit()
    return {"service": service, "product": product, "brand": brand}


@pytest.fixture
def stock_in(db, super_admin):
    def _add(product, brand, quantity, price=Decimal("5.00")):
        record = StockIn(
            product_id=product.id,
            brand_id=brand.id,
            quantity=quantity,
            price_per_unit=price,
            created_by_id=super_admin.id
        )
        db.add(record)
        db.commit()
        return record
    return _add
