"""Shared fixtures for the test suite."""

from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from quickstay.api.app import app
from quickstay.api.deps import get_upload_service
from quickstay.db.models import Base, Listing
from quickstay.db.repository import ListingRepository
from quickstay.db.session import get_db
from quickstay.uploads import UploadPolicy, UploadService

BASE_TIME = datetime(2025, 6, 1, 12, 0, 0)


@pytest.fixture
def db_engine():
    """Create an in-memory SQLite engine shared across threads."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(db_engine):
    """Create a database session for testing."""
    Session = sessionmaker(bind=db_engine)
    session = Session()
    yield session
    session.close()


@pytest.fixture
def repo(db_session):
    return ListingRepository(db_session)


def listing_payload(**overrides) -> dict:
    """A valid create payload (camelCase, as sent by API clients)."""
    payload = {
        "name": "Sunset Apartments",
        "propertyName": "Sunset Apartments",
        "type": "Rental",
        "propertyType": "Both",
        "address": "123 Main Street, Pune",
        "price": 1500,
    }
    payload.update(overrides)
    return payload


def make_listing(
    name="Green Nest PG",
    property_name=None,
    type="PG",
    property_type="Boys",
    address="12 MG Road, Bengaluru",
    price=8000,
    created_at=BASE_TIME,
    **kwargs,
) -> Listing:
    """Factory for creating test Listing instances."""
    defaults = dict(
        name=name,
        property_name=property_name or name,
        type=type,
        property_type=property_type,
        address=address,
        price=price,
        amenities=[],
        images=[],
        created_at=created_at,
        updated_at=created_at,
    )
    defaults.update(kwargs)
    return Listing(**defaults)


@pytest.fixture
def sample_listing(db_session):
    """A single listing in the DB."""
    listing = make_listing(
        description="Quiet PG near the metro",
        amenities=["WiFi", "Laundry"],
        email="owner@greennest.in",
        rating=4.2,
    )
    db_session.add(listing)
    db_session.commit()
    return listing


@pytest.fixture
def sample_listings(db_session):
    """Five listings, newest first in creation order below."""
    listings = [
        make_listing(
            name="Green Nest PG",
            type="PG",
            property_type="Boys",
            price=8000,
            verified=True,
            description="Quiet PG near the metro",
            created_at=BASE_TIME,
        ),
        make_listing(
            name="Lotus Girls Hostel",
            type="Hostel",
            property_type="Girls",
            address="4 Park Street, Kolkata",
            price=6000,
            verified=False,
            created_at=BASE_TIME - timedelta(hours=1),
        ),
        make_listing(
            name="Harbour View Flat",
            type="Rental",
            property_type="Both",
            address="88 Marine Drive, Mumbai",
            price=25000,
            verified=True,
            description="Sea facing 2BHK",
            created_at=BASE_TIME - timedelta(hours=2),
        ),
        make_listing(
            name="Hive Co-living",
            type="Co-living",
            property_type="Both",
            address="7 Koramangala, Bengaluru",
            price=14000,
            verified=False,
            created_at=BASE_TIME - timedelta(hours=3),
        ),
        make_listing(
            name="Budget Boys PG",
            type="PG",
            property_type="Boys",
            address="21 Station Road, Pune",
            price=4500,
            verified=False,
            created_at=BASE_TIME - timedelta(hours=4),
        ),
    ]
    for listing in listings:
        db_session.add(listing)
    db_session.commit()
    return listings


class FakeObjectStore:
    """In-memory object store; uploads whose body is in ``fail_on`` raise."""

    def __init__(self, fail_on=()):
        self.objects = {}
        self.deleted = []
        self.fail_on = set(fail_on)

    def put_object(self, key, data, content_type):
        if data in self.fail_on:
            raise ConnectionError(f"upload of {key} failed")
        self.objects[key] = (data, content_type)

    def delete_object(self, key):
        self.deleted.append(key)
        self.objects.pop(key, None)

    def public_url(self, key):
        return f"https://cdn.quickstay.test/{key}"


@pytest.fixture
def object_store():
    return FakeObjectStore(fail_on={b"boom"})


@pytest.fixture
def upload_service(object_store):
    return UploadService(object_store, UploadPolicy(max_files=3, max_file_size_mb=1))


@pytest.fixture
def client(db_engine, upload_service):
    """API client wired to the test database and the fake object store."""
    SessionLocal = sessionmaker(bind=db_engine)

    def override_get_db():
        db = SessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_upload_service] = lambda: upload_service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
