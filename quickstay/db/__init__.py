"""Database layer: models, session management, query building and repository."""
from quickstay.db.models import Base, Listing, slugify
from quickstay.db.query import ListingPage, build_predicates
from quickstay.db.repository import ListingRepository
from quickstay.db.session import get_db, get_engine, init_db, reset_engine

__all__ = [
    # Models
    "Base",
    "Listing",
    "slugify",
    # Querying
    "ListingPage",
    "ListingRepository",
    "build_predicates",
    # Session management
    "get_engine",
    "get_db",
    "init_db",
    "reset_engine",
]
