"""Sanitisation of list-endpoint query parameters.

Query strings arrive as plain strings. ``sanitize_filters`` coerces and
bounds-checks them into a ``ListingFilters`` instance that the query builder
can use without further checks. All violations are collected before raising.
"""

import logging
import re
from collections.abc import Mapping
from typing import Optional

import pydantic
from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

from quickstay.errors import ValidationError
from quickstay.validation.fields import to_violations
from quickstay.validation.models import ListingType, PropertyType

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10
MIN_LIMIT = 1
MAX_LIMIT = 100
DEFAULT_OFFSET = 0

_SEARCH_STRIP = re.compile(r"[<>'\"]")


def clean_search(value: str) -> Optional[str]:
    """Trim and strip ``< > ' "`` from a search term.

    Returns None when nothing is left.
    """
    cleaned = _SEARCH_STRIP.sub("", value.strip()).strip()
    return cleaned or None


class ListingFilters(BaseModel):
    """Typed, bounded filter set for listing queries.

    Built from camelCase query parameters (``minPrice``) or from attribute
    names (``min_price``).
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        frozen=True,
        extra="ignore",
    )

    type: Optional[ListingType] = None
    property_type: Optional[PropertyType] = None
    verified: Optional[bool] = None
    # max_price is declared first so the range check on min_price can see it
    max_price: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    min_price: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    search: Optional[str] = None
    limit: int = Field(DEFAULT_LIMIT, ge=MIN_LIMIT, le=MAX_LIMIT)
    offset: int = Field(DEFAULT_OFFSET, ge=0)

    @field_validator("verified", mode="before")
    @classmethod
    def parse_verified(cls, v):
        """Only the literals ``true`` and ``false`` (any case) are accepted."""
        if v is None or isinstance(v, bool):
            return v
        if isinstance(v, str) and v.strip().lower() in ("true", "false"):
            return v.strip().lower() == "true"
        raise ValueError("verified must be 'true' or 'false'")

    @field_validator("min_price")
    @classmethod
    def check_price_range(cls, v: Optional[float], info: ValidationInfo) -> Optional[float]:
        max_price = info.data.get("max_price")
        if v is not None and max_price is not None and v > max_price:
            raise ValueError("minPrice cannot be greater than maxPrice")
        return v

    @field_validator("search")
    @classmethod
    def sanitize_search(cls, v: Optional[str]) -> Optional[str]:
        return clean_search(v) if v is not None else None


def sanitize_filters(params: Mapping[str, str]) -> ListingFilters:
    """Convert raw query parameters into ``ListingFilters``.

    Args:
        params: Query parameters keyed by their camelCase names
            (``type``, ``propertyType``, ``verified``, ``minPrice``,
            ``maxPrice``, ``search``, ``limit``, ``offset``).

    Raises:
        ValidationError: listing every parameter that failed.
    """
    try:
        return ListingFilters.model_validate(dict(params))
    except pydantic.ValidationError as e:
        violations = to_violations(e)
        logger.debug(f"Query parameters rejected: {violations}")
        raise ValidationError(violations, message="Invalid query parameters") from e
