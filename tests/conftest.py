"""
Pytest configuration file.
"""
import os

# Point the application at the test database before it builds its engine
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from app.core.database import Base, get_db
from app.models.venue import Venue, VenueStatus
from app.models.booking import Booking, BookingStatus
from main import app
from datetime import date, datetime, timezone
from decimal import Decimal
import uuid

SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False}
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    """Override database dependency for testing."""
    try:
        db = TestingSessionLocal()
        yield db
    finally:
        db.close()


@pytest.fixture(scope="function")
def db():
    """Create test database."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    yield db
    db.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def session_factory(db):
    """Sessionmaker for tests that need one session per thread."""
    return TestingSessionLocal


@pytest.fixture(scope="function")
def client(db):
    """Create test client."""
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def make_venue(db, **overrides) -> Venue:
    fields = dict(
        id=str(uuid.uuid4()),
        name="Grand Hall",
        location="Downtown, Main Street 1",
        capacity=200,
        price_per_hour=Decimal("1000.00"),
        created_by="owner@venues.test",
        status=VenueStatus.ACTIVE,
        unavailable_dates=[],
    )
    fields.update(overrides)
    venue = Venue(**fields)
    db.add(venue)
    db.commit()
    db.refresh(venue)
    return venue


@pytest.fixture
def venue_factory(db):
    """Build venues with overridable fields."""
    def factory(**overrides) -> Venue:
        return make_venue(db, **overrides)
    return factory


@pytest.fixture
def sample_venue(db):
    """Create an active venue at 1000 per hour with an empty calendar."""
    return make_venue(db)


@pytest.fixture
def blocked_venue(db):
    """Create an active venue blocked on 2025-07-25."""
    return make_venue(
        db,
        name="Garden Terrace",
        location="Uptown Park",
        capacity=80,
        price_per_hour=Decimal("100.00"),
        unavailable_dates=["2025-07-25"],
    )


@pytest.fixture
def retired_venue(db):
    """Create a soft-deleted venue."""
    return make_venue(
        db,
        name="Old Warehouse",
        location="Harbour",
        status=VenueStatus.RETIRED,
    )


@pytest.fixture
def sample_booking(db, sample_venue):
    """Create a confirmed booking on 2025-09-01 and block the date."""
    booking = Booking(
        id=str(uuid.uuid4()),
        venue_id=sample_venue.id,
        user_name="Alice",
        user_email="alice@example.com",
        booking_date=date(2025, 9, 1),
        hours_booked=4,
        price_per_hour=Decimal("1000.00"),
        total_cost=Decimal("4000.00"),
        status=BookingStatus.CONFIRMED,
        created_at=datetime(2025, 8, 1, 12, 0, tzinfo=timezone.utc),
    )
    db.add(booking)
    sample_venue.unavailable_dates = ["2025-09-01"]
    db.commit()
    db.refresh(booking)
    return booking
