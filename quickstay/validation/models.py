"""Pydantic models for listing payloads.

Each payload type has its own schema: ``CreateListing`` for new listings,
``UpdateListing`` for partial updates and ``ListingRead`` for responses.
Payloads use camelCase keys on the wire (``propertyName``) while the
attributes match the database columns (``property_name``); both spellings
are accepted on input.
"""

from enum import Enum
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, StrictBool, StrictFloat, field_validator
from pydantic.alias_generators import to_camel

# Exclusive upper bound of the Numeric(10, 2) price column
MAX_PRICE = 10**8


class ListingType(str, Enum):
    """Kind of accommodation."""
    PG = "PG"
    RENTAL = "Rental"
    HOSTEL = "Hostel"
    CO_LIVING = "Co-living"


class PropertyType(str, Enum):
    """Who the accommodation is meant for."""
    BOYS = "Boys"
    GIRLS = "Girls"
    BOTH = "Both"


_PAYLOAD_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    str_strip_whitespace=True,
    use_enum_values=True,
    extra="ignore",
)


def _check_cents(v: Optional[float]) -> Optional[float]:
    if v is not None and round(v, 2) != v:
        raise ValueError("must have at most 2 decimal places")
    return v


class CreateListing(BaseModel):
    """Validated payload for creating a listing.

    Numbers and flags are strict: ``"1500"`` is not a price and ``"yes"`` is
    not a boolean.

    Example:
        listing = CreateListing(
            name="Sunset Apartments",
            propertyName="Sunset Apartments",
            type="Rental",
            propertyType="Both",
            address="123 Main Street",
            price=1500,
        )
    """
    model_config = _PAYLOAD_CONFIG

    # Required fields
    name: str = Field(..., min_length=1, description="Display name")
    property_name: str = Field(..., min_length=1, description="Property name, source of the slug")
    type: ListingType = Field(..., description="Kind of accommodation")
    property_type: PropertyType = Field(..., description="Boys, Girls or Both")
    address: str = Field(..., min_length=1, description="Street address")
    price: StrictFloat = Field(..., gt=0, lt=MAX_PRICE, allow_inf_nan=False, description="Price per month")

    # Optional fields
    rating: Optional[StrictFloat] = Field(None, ge=0, le=5, allow_inf_nan=False, description="Rating out of 5")
    description: Optional[str] = None
    verified: StrictBool = False
    is_active: StrictBool = True
    amenities: list[str] = Field(default_factory=list, description="Amenities, e.g. WiFi, Parking")
    images: list[str] = Field(default_factory=list, description="Image URLs or object keys")
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    google_map_link: Optional[str] = None

    @field_validator("price", "rating")
    @classmethod
    def validate_cents(cls, v: Optional[float]) -> Optional[float]:
        return _check_cents(v)


class UpdateListing(BaseModel):
    """Validated payload for a partial update.

    Every field is optional. Use ``model_dump(exclude_unset=True)`` to get
    only the fields the client actually sent.
    """
    model_config = _PAYLOAD_CONFIG

    name: Optional[str] = Field(None, min_length=1)
    property_name: Optional[str] = Field(None, min_length=1)
    type: Optional[ListingType] = None
    property_type: Optional[PropertyType] = None
    address: Optional[str] = Field(None, min_length=1)
    price: Optional[StrictFloat] = Field(None, gt=0, lt=MAX_PRICE, allow_inf_nan=False)
    rating: Optional[StrictFloat] = Field(None, ge=0, le=5, allow_inf_nan=False)
    description: Optional[str] = None
    verified: Optional[StrictBool] = None
    is_active: Optional[StrictBool] = None
    amenities: Optional[list[str]] = None
    images: Optional[list[str]] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    google_map_link: Optional[str] = None

    @field_validator(
        "name", "property_name", "type", "property_type", "address", "price",
        "verified", "is_active", "amenities", "images",
    )
    @classmethod
    def reject_null(cls, v):
        """Columns that are NOT NULL cannot be cleared with an explicit null."""
        if v is None:
            raise ValueError("may not be null")
        return v

    @field_validator("price", "rating")
    @classmethod
    def validate_cents(cls, v: Optional[float]) -> Optional[float]:
        return _check_cents(v)


class ListingRead(BaseModel):
    """Listing as returned by the API."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: str
    name: str
    property_name: str
    slug: Optional[str] = None
    type: str
    property_type: str
    address: str
    price: float
    rating: Optional[float] = None
    description: Optional[str] = None
    verified: bool
    is_active: bool
    is_deleted: bool
    amenities: list[str]
    images: list[str]
    email: Optional[str] = None
    phone: Optional[str] = None
    google_map_link: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = None


class UploadedImage(BaseModel):
    """Object stored by the image upload endpoint (not persisted)."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    key: str
    url: str
    content_type: str
    size_bytes: int
