"""Image uploads to object storage."""
from quickstay.uploads.policy import ALLOWED_EXTENSIONS, IncomingFile, UploadPolicy
from quickstay.uploads.service import ObjectStore, UploadService, make_object_key
from quickstay.uploads.storage import GCSObjectStore

__all__ = [
    "ALLOWED_EXTENSIONS",
    "IncomingFile",
    "UploadPolicy",
    "ObjectStore",
    "UploadService",
    "make_object_key",
    "GCSObjectStore",
]
