"""
Test configuration and fixtures
"""
import os

# Must be set before app.config is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BARBER_API_KEY"] = "test-barber-key"
os.environ["SEED_SHOPS"] = "false"
os.environ["ENVIRONMENT"] = "development"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from app.main import app
from app.db import get_session
from app.data import SHOPS
from app.models import Shop


# Create an in-memory SQLite database for testing
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


@pytest.fixture(scope="function")
def db():
    """Create a fresh database for each test"""
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with overridden session dependency"""
    def override_get_session():
        yield db

    app.dependency_overrides[get_session] = override_get_session
    with TestClient(app=app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def shops(db):
    """The reference directory: shops 1, 2, 4 support silent cuts, 3 and 5 don't"""
    rows = [Shop(**row) for row in SHOPS]
    for shop in rows:
        db.add(shop)
    db.commit()
    for shop in rows:
        db.refresh(shop)
    return rows


@pytest.fixture
def shop_without_coords(db):
    shop = Shop(
        name="Pop-up Trims",
        address="Somewhere in Kent",
        base_price_pence=1500,
        styles=["Buzz cut"],
        supports_silent=True,
    )
    db.add(shop)
    db.commit()
    db.refresh(shop)
    return shop


@pytest.fixture
def barber_headers():
    return {"Authorization": "Bearer test-barber-key"}


@pytest.fixture
def make_booking(client):
    """POST /bookings with sensible defaults"""
    def _make(**overrides):
        payload = {
            "barberId": "1",
            "customerName": "Alex",
            "date": "2025-06-01",
            "time": "10:00",
        }
        payload.update(overrides)
        return client.post("/bookings", json=payload)
    return _make
