"""Listing query construction.

``build_predicates`` turns a sanitised filter set into a list of SQLAlchemy
predicates; ``count_listings`` and ``fetch_page`` compose them into the
count and page queries. Values are always bound parameters.
"""

from dataclasses import dataclass, field

from sqlalchemy import ColumnElement, func, or_, select
from sqlalchemy.orm import Session

from quickstay.db.models import Listing
from quickstay.validation.filters import ListingFilters


@dataclass
class ListingPage:
    """One page of listings plus the total number of matches."""

    items: list[Listing] = field(default_factory=list)
    total: int = 0


def _like_pattern(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def build_predicates(filters: ListingFilters) -> list[ColumnElement[bool]]:
    """Build the WHERE predicates for a filter set.

    Soft-deleted listings are always excluded.
    """
    predicates: list[ColumnElement[bool]] = [Listing.is_deleted.is_(False)]

    if filters.type is not None:
        predicates.append(Listing.type == filters.type)
    if filters.property_type is not None:
        predicates.append(Listing.property_type == filters.property_type)
    if filters.verified is not None:
        predicates.append(Listing.verified.is_(filters.verified))

    if filters.min_price is not None:
        predicates.append(Listing.price >= filters.min_price)
    if filters.max_price is not None:
        predicates.append(Listing.price <= filters.max_price)

    if filters.search:
        pattern = _like_pattern(filters.search)
        predicates.append(
            or_(
                Listing.name.ilike(pattern, escape="\\"),
                Listing.address.ilike(pattern, escape="\\"),
                Listing.description.ilike(pattern, escape="\\"),
            )
        )

    return predicates


def count_listings(db: Session, filters: ListingFilters) -> int:
    """Count listings matching the filters, ignoring pagination."""
    query = select(func.count(Listing.id)).where(*build_predicates(filters))
    return db.execute(query).scalar_one()


def fetch_page(db: Session, filters: ListingFilters) -> list[Listing]:
    """Fetch one page, newest first, ties broken by id."""
    query = (
        select(Listing)
        .where(*build_predicates(filters))
        .order_by(Listing.created_at.desc(), Listing.id.desc())
        .limit(filters.limit)
        .offset(filters.offset)
    )
    return list(db.execute(query).scalars().all())


def run_listing_query(db: Session, filters: ListingFilters) -> ListingPage:
    """Return the requested page together with the total match count."""
    return ListingPage(items=fetch_page(db, filters), total=count_listings(db, filters))
