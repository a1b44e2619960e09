"""Listing persistence operations.

The repository wraps a SQLAlchemy session supplied by the caller (a FastAPI
dependency in the API, a plain session in tests and scripts). Database
failures are rolled back, logged and re-raised as ``StorageError``.
"""

import logging
from datetime import UTC, datetime
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from quickstay.db.models import Listing
from quickstay.db.query import ListingPage, run_listing_query
from quickstay.errors import NotFound, StorageError
from quickstay.validation.filters import ListingFilters
from quickstay.validation.models import CreateListing, UpdateListing

logger = logging.getLogger(__name__)

# Page size used when the repository is called without a filter set
INTERNAL_DEFAULT_LIMIT = 50


class ListingRepository:
    """Create, update and query listings.

    Example:
        repo = ListingRepository(session)
        listing = repo.create(validate_create(payload))
        page = repo.list(sanitize_filters({"type": "PG"}))
    """

    def __init__(self, db: Session):
        self.db = db

    def _fail(self, action: str, error: SQLAlchemyError) -> StorageError:
        self.db.rollback()
        logger.error(f"Database error while {action}: {error}", exc_info=True)
        return StorageError(f"Database error while {action}: {error}")

    def create(self, payload: CreateListing) -> Listing:
        """Persist a new listing and return the stored record."""
        listing = Listing(**payload.model_dump())
        try:
            self.db.add(listing)
            self.db.commit()
            self.db.refresh(listing)
        except SQLAlchemyError as e:
            raise self._fail("creating listing", e) from e

        logger.info(f"Listing created with ID: {listing.id}")
        return listing

    def update_by_id(self, listing_id: str, payload: UpdateListing) -> Listing:
        """Merge the supplied fields onto an existing listing.

        Only fields present in the payload are written; explicit nulls on
        nullable columns clear them.

        Raises:
            NotFound: no (non-deleted) listing has this id.
        """
        listing = self.get_by_id(listing_id)
        changes = payload.model_dump(exclude_unset=True)
        if not changes:
            logger.info(f"Listing {listing_id} update carried no recognised fields")
            return listing

        try:
            for key, value in changes.items():
                setattr(listing, key, value)
            listing.updated_at = datetime.now(UTC)
            self.db.commit()
            self.db.refresh(listing)
        except SQLAlchemyError as e:
            raise self._fail(f"updating listing {listing_id}", e) from e

        logger.info(f"Listing updated with ID: {listing_id} (fields: {', '.join(sorted(changes))})")
        return listing

    def get_by_id(self, listing_id: str) -> Listing:
        try:
            listing = self.db.execute(
                select(Listing).where(Listing.is_deleted.is_(False), Listing.id == listing_id)
            ).scalar_one_or_none()
        except SQLAlchemyError as e:
            raise self._fail(f"retrieving listing {listing_id}", e) from e
        if listing is None:
            raise NotFound()
        return listing

    def get_by_slug(self, slug: str) -> Listing:
        """Fetch a listing by slug; the oldest wins when slugs collide."""
        try:
            result = self.db.execute(
                select(Listing)
                .where(Listing.is_deleted.is_(False), Listing.slug == slug)
                .order_by(Listing.created_at.asc(), Listing.id.asc())
            )
            listing = result.scalars().first()
        except SQLAlchemyError as e:
            raise self._fail(f"retrieving listing by slug {slug!r}", e) from e
        if listing is None:
            raise NotFound()
        return listing

    def list(self, filters: Optional[ListingFilters] = None) -> ListingPage:
        """Return one page of listings and the total match count."""
        if filters is None:
            filters = ListingFilters(limit=INTERNAL_DEFAULT_LIMIT)
        try:
            page = run_listing_query(self.db, filters)
        except SQLAlchemyError as e:
            raise self._fail("retrieving listings", e) from e

        logger.info(f"Retrieved {len(page.items)} listings out of {page.total} total")
        return page
