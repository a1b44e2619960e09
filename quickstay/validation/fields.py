"""Validation entry points for create/update payloads and path ids.

These wrap the pydantic payload models and translate their errors into the
application's ``ValidationError`` so every violated field is reported in a
single response.
"""

import logging
import uuid
from typing import Any

import pydantic

from quickstay.errors import ValidationError
from quickstay.validation.models import CreateListing, UpdateListing

logger = logging.getLogger(__name__)


def to_violations(exc: pydantic.ValidationError) -> list[dict]:
    """Convert pydantic errors to ``{"field", "message"}`` violations.

    Errors on list items (``amenities.1``) are reported against the list
    field itself. Errors without a location (payload is not an object) are
    reported against ``body``.
    """
    violations = []
    for err in exc.errors():
        loc = err.get("loc") or ()
        field = str(loc[0]) if loc else "body"
        violations.append({"field": field, "message": err["msg"]})
    return violations


def validate_create(payload: Any) -> CreateListing:
    """Validate a create payload, accumulating every violation."""
    try:
        return CreateListing.model_validate(payload)
    except pydantic.ValidationError as e:
        violations = to_violations(e)
        logger.debug(f"Create payload rejected: {violations}")
        raise ValidationError(violations) from e


def validate_update(payload: Any) -> UpdateListing:
    """Validate a partial update payload.

    Unknown keys are ignored, so a payload with no recognised fields is a
    valid no-op update.
    """
    try:
        return UpdateListing.model_validate(payload)
    except pydantic.ValidationError as e:
        violations = to_violations(e)
        logger.debug(f"Update payload rejected: {violations}")
        raise ValidationError(violations) from e


def validate_listing_id(value: str) -> str:
    """Ensure a path id is a UUID and return it in canonical form."""
    try:
        return str(uuid.UUID(value))
    except (ValueError, TypeError, AttributeError):
        raise ValidationError.single("id", f"Invalid listing id: {value!r} is not a valid UUID")
