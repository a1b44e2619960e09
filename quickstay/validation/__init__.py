"""Request validation: payload schemas, path ids and list filters.

Main exports:
- CreateListing / UpdateListing: payload schemas (pydantic)
- validate_create / validate_update / validate_listing_id: raise
  ``quickstay.errors.ValidationError`` with one violation per bad field
- sanitize_filters: turn raw query parameters into ``ListingFilters``

Example usage:
    from quickstay.validation import sanitize_filters, validate_create

    payload = validate_create({
        "name": "Sunset Apartments",
        "propertyName": "Sunset Apartments",
        "type": "Rental",
        "propertyType": "Both",
        "address": "123 Main Street",
        "price": 1500,
    })
    filters = sanitize_filters({"type": "PG", "limit": "20"})
"""

from .models import CreateListing, ListingRead, ListingType, PropertyType, UpdateListing, UploadedImage
from .fields import validate_create, validate_listing_id, validate_update
from .filters import ListingFilters, clean_search, sanitize_filters

__all__ = [
    "CreateListing",
    "UpdateListing",
    "ListingRead",
    "UploadedImage",
    "ListingType",
    "PropertyType",
    "validate_create",
    "validate_update",
    "validate_listing_id",
    "ListingFilters",
    "clean_search",
    "sanitize_filters",
]
