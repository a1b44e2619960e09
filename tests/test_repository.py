"""Tests for listing repository operations."""

import uuid
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from quickstay.db.models import Listing
from quickstay.db.repository import INTERNAL_DEFAULT_LIMIT, ListingRepository
from quickstay.errors import NotFound, StorageError
from quickstay.validation import ListingFilters, ListingRead, validate_create, validate_update
from tests.conftest import BASE_TIME, listing_payload, make_listing


def snapshot(listing: Listing) -> dict:
    return ListingRead.model_validate(listing).model_dump(by_alias=True, mode="json")


class TestCreate:

    def test_assigns_id_timestamps_and_slug(self, repo):
        listing = repo.create(validate_create(listing_payload(propertyName="Sunset Apartments!!")))
        assert uuid.UUID(listing.id)
        assert listing.slug == "sunset-apartments"
        assert listing.created_at is not None
        assert listing.updated_at is not None
        assert listing.is_deleted is False
        assert listing.is_active is True

    def test_stores_every_field(self, repo, db_session):
        payload = listing_payload(
            rating=4.5,
            description="Beautiful apartment with modern amenities",
            amenities=["WiFi", "Parking", "Gym"],
            images=["https://cdn.quickstay.test/a.jpg"],
            email="contact@sunsetapartments.com",
            phone="+1234567890",
            googleMapLink="https://maps.google.com/?q=sunset",
            verified=True,
        )
        created = repo.create(validate_create(payload))

        stored = db_session.get(Listing, created.id)
        assert stored.rating == 4.5
        assert stored.amenities == ["WiFi", "Parking", "Gym"]
        assert stored.images == ["https://cdn.quickstay.test/a.jpg"]
        assert stored.google_map_link == "https://maps.google.com/?q=sunset"
        assert stored.verified is True

    def test_storage_failure_raises_storage_error(self):
        db = MagicMock()
        db.commit.side_effect = OperationalError("INSERT", {}, Exception("connection lost"))
        repo = ListingRepository(db)

        with pytest.raises(StorageError):
            repo.create(validate_create(listing_payload()))
        db.rollback.assert_called_once()


class TestUpdate:

    def test_missing_id_raises_not_found(self, repo):
        with pytest.raises(NotFound):
            repo.update_by_id(str(uuid.uuid4()), validate_update({"price": 2000}))

    def test_only_price_and_updated_at_change(self, repo, sample_listing):
        before = snapshot(sample_listing)

        updated = repo.update_by_id(sample_listing.id, validate_update({"price": 2000}))
        after = snapshot(updated)

        assert after["price"] == 2000
        assert after["updatedAt"] > before["updatedAt"]
        changed = {key for key in before if before[key] != after[key]}
        assert changed == {"price", "updatedAt"}

    def test_property_name_recomputes_slug(self, repo, sample_listing):
        updated = repo.update_by_id(sample_listing.id, validate_update({"propertyName": "Blue Door  Residency"}))
        assert updated.slug == "blue-door-residency"

    def test_explicit_false_and_null_overwrite(self, repo, sample_listing):
        updated = repo.update_by_id(
            sample_listing.id,
            validate_update({"isActive": False, "rating": None, "email": None}),
        )
        assert updated.is_active is False
        assert updated.rating is None
        assert updated.email is None
        assert updated.amenities == ["WiFi", "Laundry"]

    def test_empty_update_is_noop(self, repo, sample_listing):
        before = snapshot(sample_listing)
        updated = repo.update_by_id(sample_listing.id, validate_update({}))
        assert snapshot(updated) == before

    def test_soft_deleted_listing_not_updatable(self, repo, db_session, sample_listing):
        sample_listing.is_deleted = True
        db_session.commit()
        with pytest.raises(NotFound):
            repo.update_by_id(sample_listing.id, validate_update({"price": 2000}))


class TestGet:

    def test_get_by_id(self, repo, sample_listing):
        assert repo.get_by_id(sample_listing.id).name == "Green Nest PG"

    def test_get_by_id_missing(self, repo):
        with pytest.raises(NotFound):
            repo.get_by_id(str(uuid.uuid4()))

    def test_get_by_slug(self, repo, sample_listing):
        assert repo.get_by_slug("green-nest-pg").id == sample_listing.id

    def test_get_by_slug_missing(self, repo, sample_listing):
        with pytest.raises(NotFound):
            repo.get_by_slug("no-such-place")

    def test_duplicate_slug_returns_oldest(self, repo, db_session):
        newer = make_listing(name="Twin", created_at=BASE_TIME)
        older = make_listing(name="Twin", created_at=BASE_TIME.replace(year=2024))
        db_session.add_all([newer, older])
        db_session.commit()
        assert repo.get_by_slug("twin").id == older.id

    def test_soft_deleted_hidden(self, repo, db_session, sample_listing):
        sample_listing.is_deleted = True
        db_session.commit()
        with pytest.raises(NotFound):
            repo.get_by_id(sample_listing.id)
        with pytest.raises(NotFound):
            repo.get_by_slug("green-nest-pg")


class TestList:

    def test_with_filters(self, repo, sample_listings):
        page = repo.list(ListingFilters(type="PG", limit=1))
        assert page.total == 2
        assert len(page.items) == 1

    def test_without_filters_uses_internal_default(self, repo, db_session):
        for i in range(INTERNAL_DEFAULT_LIMIT + 5):
            db_session.add(make_listing(name=f"Listing {i}"))
        db_session.commit()

        page = repo.list()
        assert page.total == INTERNAL_DEFAULT_LIMIT + 5
        assert len(page.items) == INTERNAL_DEFAULT_LIMIT
