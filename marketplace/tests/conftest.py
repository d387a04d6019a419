"""Pytest configuration and fixtures"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

import pytest
from datetime import datetime, timedelta
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from marketplace.core.database import Base, get_db
from marketplace.core.security import get_password_hash, create_access_token
from marketplace.main import app
from marketplace.models import Address, Merchant, Order, Product, User

SQLALCHEMY_TEST_DATABASE_URL = os.environ["DATABASE_URL"]

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL, connect_args={"check_same_thread": False}
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

BASE_TIME = datetime(2024, 1, 1, 12, 0, 0)


@pytest.fixture(scope="function")
def db():
    """Database session for one test"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db):
    """FastAPI test client bound to the test session"""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def _make_user(db, email, name, phone):
    user = User(
        email=email,
        full_name=name,
        phone=phone,
        password_hash=get_password_hash("testpass123"),
        created_at=BASE_TIME,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def test_user(db):
    return _make_user(db, "test@example.com", "Test User", "+265991000001")


@pytest.fixture
def test_user2(db):
    return _make_user(db, "test2@example.com", "Test User 2", "+265991000002")


@pytest.fixture
def auth_headers(test_user):
    token = create_access_token({"sub": str(test_user.id)})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers_user2(test_user2):
    token = create_access_token({"sub": str(test_user2.id)})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def catalogue(db):
    """
    Two active merchants, one inactive merchant and a mix of products.

    Visible coffee products, in listing order:
    Latte (featured), Cold Brew (4.8), Espresso (4.0), 100% Arabica (3.0).
    """
    brew_house = Merchant(
        name="Brew House",
        description="Specialty coffee roasters",
        category="coffee",
        rating=4.5,
        min_order=5,
        delivery_fee=1.5,
        is_dropx=True,
        open_hours='{"mon": "08:00-18:00"}',
        status="active",
        created_at=BASE_TIME,
    )
    corner_bakery = Merchant(
        name="Corner Bakery",
        description="Fresh bread every morning",
        category="bakery",
        rating=4.5,
        is_dropx=False,
        open_hours="{broken",
        status="active",
        created_at=BASE_TIME + timedelta(minutes=1),
    )
    closed_cafe = Merchant(
        name="Closed Cafe",
        description="Gone for good",
        category="coffee",
        rating=5.0,
        status="inactive",
        created_at=BASE_TIME + timedelta(minutes=2),
    )
    db.add_all([brew_house, corner_bakery, closed_cafe])
    db.flush()

    def product(merchant, name, minutes, **fields):
        fields.setdefault("status", "active")
        fields.setdefault("price", 3)
        return Product(
            merchant_id=merchant.id,
            name=name,
            created_at=BASE_TIME + timedelta(minutes=minutes),
            **fields,
        )

    products = {
        "espresso": product(
            brew_house, "Espresso", 1, category="coffee", rating=4.0,
            description="Strong shot", tags='["hot"]',
        ),
        "latte": product(
            brew_house, "Latte", 2, category="coffee", rating=3.5,
            featured=True, description="Milky", price=4.25,
        ),
        "cold_brew": product(
            brew_house, "Cold Brew", 3, category="coffee", rating=4.8,
            description="Steeped overnight",
        ),
        "arabica": product(
            brew_house, "100% Arabica", 4, category="coffee", rating=3.0,
            description="Single origin beans",
        ),
        "old_mocha": product(
            brew_house, "Old Mocha", 5, category="coffee", rating=5.0,
            status="inactive",
        ),
        "hidden": product(
            closed_cafe, "Hidden Flat White", 6, category="coffee", rating=5.0,
        ),
        "croissant": product(
            corner_bakery, "Croissant", 7, category="bakery", rating=4.2,
            description="Buttery", tags='["pastry", "breakfast", "pastry"]',
        ),
        "sourdough": product(
            corner_bakery, "Sourdough", 8, category="bakery", rating=4.1,
            description="Crusty loaf", tags="not json",
        ),
    }
    db.add_all(products.values())
    db.commit()

    return {
        "merchants": {
            "brew_house": brew_house,
            "corner_bakery": corner_bakery,
            "closed_cafe": closed_cafe,
        },
        "products": products,
    }


@pytest.fixture
def address_payload():
    def build(label="Home", **overrides):
        payload = {
            "label": label,
            "full_name": "Test User",
            "phone": "+265 991 000 001",
            "address_line1": "12 Kenyatta Road",
            "city": "Lilongwe",
            "neighborhood": "Area 10",
        }
        payload.update(overrides)
        return payload

    return build


@pytest.fixture
def address_book(db, test_user):
    """Addresses A (default), B, C created one minute apart"""
    created = []
    for index, label in enumerate(["A", "B", "C"]):
        address = Address(
            user_id=test_user.id,
            label=label,
            full_name="Test User",
            phone="+265991000001",
            address_line1=f"{index + 1} Main Street",
            city="Lilongwe",
            is_default=index == 0,
            created_at=BASE_TIME + timedelta(minutes=index),
        )
        db.add(address)
        created.append(address)
    db.commit()
    for address in created:
        db.refresh(address)
    return {address.label: address for address in created}


@pytest.fixture
def test_orders(db, test_user, test_user2, catalogue):
    brew_house = catalogue["merchants"]["brew_house"]
    orders = [
        Order(
            user_id=test_user.id,
            merchant_id=brew_house.id,
            order_number="ORD-001",
            status="delivered",
            total_amount=10,
            items='[{"product": "Latte", "qty": 2}]',
            created_at=BASE_TIME,
        ),
        Order(
            user_id=test_user.id,
            merchant_id=None,
            order_number="ORD-002",
            status="pending",
            total_amount=20,
            items="{oops",
            created_at=BASE_TIME + timedelta(days=1),
        ),
        Order(
            user_id=test_user2.id,
            merchant_id=brew_house.id,
            order_number="ORD-003",
            status="pending",
            total_amount=99,
            created_at=BASE_TIME + timedelta(days=2),
        ),
    ]
    db.add_all(orders)
    db.commit()
    return orders


@pytest.fixture
def other_session(db):
    """Second session on the same database, standing in for a concurrent writer"""
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
