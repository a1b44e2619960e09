"""Listing create, update, list and detail endpoints."""
from typing import Any

from fastapi import APIRouter, Body, Depends, Request

from quickstay.api import responses
from quickstay.api.deps import get_repository, require_api_key
from quickstay.db.models import Listing
from quickstay.db.repository import ListingRepository
from quickstay.validation import (
    ListingRead,
    sanitize_filters,
    validate_create,
    validate_listing_id,
    validate_update,
)

router = APIRouter()


def serialize(listing: Listing) -> dict:
    """Render a listing with camelCase keys."""
    return ListingRead.model_validate(listing).model_dump(by_alias=True, mode="json")


@router.post("", status_code=201, dependencies=[Depends(require_api_key)])
def create_listing(
    payload: Any = Body(None),
    repo: ListingRepository = Depends(get_repository),
):
    """Create a new accommodation listing.

    Requires name, propertyName, type, propertyType, address and price.
    Every invalid field is reported in ``data``.
    """
    listing = repo.create(validate_create(payload))
    return responses.created("Listing created successfully", serialize(listing))


@router.put("/{listing_id}", dependencies=[Depends(require_api_key)])
def update_listing(
    listing_id: str,
    payload: Any = Body(None),
    repo: ListingRepository = Depends(get_repository),
):
    """Partially update a listing; fields not sent keep their value."""
    listing_id = validate_listing_id(listing_id)
    changes = validate_update(payload if payload is not None else {})
    listing = repo.update_by_id(listing_id, changes)
    return responses.success("Listing updated successfully", serialize(listing))


@router.get("", dependencies=[Depends(require_api_key)])
def list_listings(
    request: Request,
    repo: ListingRepository = Depends(get_repository),
):
    """List listings with optional filters, newest first.

    Query parameters: type, propertyType, verified, minPrice, maxPrice,
    search, limit (1-100, default 10), offset (default 0).
    """
    filters = sanitize_filters(request.query_params)
    page = repo.list(filters)

    return responses.success(
        "Listings retrieved successfully",
        {
            "items": [serialize(listing) for listing in page.items],
            "pagination": {
                "total": page.total,
                "limit": filters.limit,
                "offset": filters.offset,
                "hasMore": page.total > filters.offset + filters.limit,
            },
        },
    )


@router.get("/slug/{slug}")
def get_listing_by_slug(
    slug: str,
    repo: ListingRepository = Depends(get_repository),
):
    """Public listing page lookup by slug."""
    listing = repo.get_by_slug(slug)
    return responses.success("Listing retrieved successfully", serialize(listing))


@router.get("/{listing_id}", dependencies=[Depends(require_api_key)])
def get_listing(
    listing_id: str,
    repo: ListingRepository = Depends(get_repository),
):
    """Get a single listing by id."""
    listing = repo.get_by_id(validate_listing_id(listing_id))
    return responses.success("Listing retrieved successfully", serialize(listing))
