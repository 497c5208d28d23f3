import os

# Point the app's own engine at the test database before it is imported
SQLALCHEMY_DATABASE_URL = "sqlite:///./test_booking.db"
os.environ["DATABASE_URL"] = SQLALCHEMY_DATABASE_URL

import datetime
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from booking_engine.main import app
from booking_engine.database import Base, get_db
from booking_engine import models
from booking_engine.pricing import calculate_price

# --- Test Database Setup ---
engine = create_engine(
    SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False}
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


# --- Database Management Fixtures ---
@pytest.fixture(scope="session", autouse=True)
def setup_db():
    """Creates and drops the test database tables for bookings."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """Provides a clean database session for each booking test."""
    connection = engine.connect()
    transaction = connection.begin()
    session = TestingSessionLocal(bind=connection)
    yield session
    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture
def add_booking(db_session):
    """Inserts a booking row directly, bypassing the availability check."""
    def _add(property_id="prop-1", check_in=None, check_out=None, status="confirmed",
             guest_id="guest-99", price_per_night=Decimal("100")):
        quote = calculate_price(price_per_night, check_in, check_out)
        booking = models.Booking(
            property_id=property_id,
            guest_id=guest_id,
            check_in_date=check_in,
            check_out_date=check_out,
            status=status,
            created_at=datetime.datetime(2024, 1, 1),
            **quote.as_dict(),
        )
        db_session.add(booking)
        db_session.commit()
        db_session.refresh(booking)
        return booking
    return _add


# --- API Test Client Fixture ---
@pytest.fixture(scope="function")
def client(db_session):
    """Provides a TestClient for the booking engine."""
    def override_get_db():
        """Overrides the get_db dependency for booking tests."""
        yield db_session

    # Apply the database override
    app.dependency_overrides[get_db] = override_get_db

    # Create and yield the TestClient
    with TestClient(app) as c:
        yield c

    # Clean up overrides
    app.dependency_overrides.clear()
