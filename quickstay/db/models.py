"""SQLAlchemy models for accommodation listings."""
import re
import uuid
from datetime import UTC, datetime
from typing import Optional

from sqlalchemy import JSON, Boolean, DateTime, Numeric, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, validates

_SLUG_STRIP = re.compile(r"[^\w\s-]", re.ASCII)
_SLUG_SEPARATORS = re.compile(r"[\s_-]+")


def slugify(value: str) -> str:
    """Derive a URL-safe slug from a property name.

    "Sunset Apartments!!" -> "sunset-apartments"
    """
    slug = value.lower().strip()
    slug = _SLUG_STRIP.sub("", slug)
    slug = _SLUG_SEPARATORS.sub("-", slug)
    return slug.strip("-")


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


class Listing(Base):
    """Accommodation listing (PG, rental, hostel or co-living space)."""
    __tablename__ = "listings"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    # Identity
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    property_name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[Optional[str]] = mapped_column(String(255), index=True)
    type: Mapped[str] = mapped_column(String(20), nullable=False, index=True)  # PG, Rental, Hostel, Co-living
    property_type: Mapped[str] = mapped_column(String(10), nullable=False, index=True)  # Boys, Girls, Both

    # Location and pricing
    address: Mapped[str] = mapped_column(Text, nullable=False)
    price: Mapped[float] = mapped_column(Numeric(10, 2, asdecimal=False), nullable=False, index=True)
    rating: Mapped[Optional[float]] = mapped_column(Numeric(3, 2, asdecimal=False))
    google_map_link: Mapped[Optional[str]] = mapped_column(String(255))

    # Rich content
    description: Mapped[Optional[str]] = mapped_column(Text)
    amenities: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    images: Mapped[list] = mapped_column(JSON, nullable=False, default=list)

    # Contact
    email: Mapped[Optional[str]] = mapped_column(String(255))
    phone: Mapped[Optional[str]] = mapped_column(String(255))

    # Flags
    verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow, onupdate=_utcnow)
    deleted_at: Mapped[Optional[datetime]] = mapped_column(DateTime)

    @validates("property_name")
    def _derive_slug(self, key, value):
        if value:
            self.slug = slugify(value)
        return value

    def __repr__(self) -> str:
        return f"<Listing(id='{self.id}', slug='{self.slug}', price={self.price})>"
