"""Dependency providers for the QuickStay API."""
import secrets
from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from quickstay.config import settings
from quickstay.db.repository import ListingRepository
from quickstay.db.session import get_db
from quickstay.errors import AuthenticationError
from quickstay.uploads import GCSObjectStore, UploadPolicy, UploadService

_upload_service: Optional[UploadService] = None


def get_repository(db: Session = Depends(get_db)) -> ListingRepository:
    """Return a repository bound to the request's session."""
    return ListingRepository(db)


def get_upload_service() -> UploadService:
    """Return the shared upload service (object store client is reused)."""
    global _upload_service
    if _upload_service is None:
        _upload_service = UploadService(GCSObjectStore(), UploadPolicy.from_settings())
    return _upload_service


def require_api_key(
    authorization: Optional[str] = Header(None),
    x_api_key: Optional[str] = Header(None),
) -> None:
    """Placeholder auth: compare a bearer token or X-API-Key with the configured key.

    Disabled when no key is configured.
    """
    if not settings.api_key:
        return

    token = x_api_key
    if token is None and authorization:
        scheme, _, value = authorization.partition(" ")
        token = value if scheme.lower() == "bearer" else None

    if not token:
        raise AuthenticationError("Authentication required")
    if not secrets.compare_digest(token, settings.api_key):
        raise AuthenticationError("Invalid API key")
