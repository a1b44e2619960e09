"""Concurrent image uploads to object storage.

A batch either succeeds as a whole or fails as a whole: files are checked
against the ``UploadPolicy`` before anything is stored, uploaded in parallel,
and if any upload fails the objects already stored for that batch are
deleted again before the error is raised.
"""

import asyncio
import logging
import re
import uuid
from datetime import UTC, datetime
from typing import Optional, Protocol

from quickstay.errors import StorageError
from quickstay.uploads.policy import IncomingFile, UploadPolicy
from quickstay.validation.models import UploadedImage

logger = logging.getLogger(__name__)

KEY_PREFIX = "uploads/images"
_SAFE_EXTENSION = re.compile(r"[a-z0-9]{1,8}")


class ObjectStore(Protocol):
    """Minimal object-store interface used by ``UploadService``."""

    def put_object(self, key: str, data: bytes, content_type: str) -> None: ...

    def delete_object(self, key: str) -> None: ...

    def public_url(self, key: str) -> str: ...


def make_object_key(filename: str, now: Optional[datetime] = None) -> str:
    """Build ``uploads/images/<YYYY-MM-DD>/<uuid>.<ext>`` for a file.

    Extensions that are not 1-8 lowercase alphanumerics become ``bin``.
    """
    now = now or datetime.now(UTC)
    ext = filename.rsplit(".", 1)[1].lower() if filename and "." in filename else ""
    if not _SAFE_EXTENSION.fullmatch(ext):
        ext = "bin"
    return f"{KEY_PREFIX}/{now.date().isoformat()}/{uuid.uuid4()}.{ext}"


class UploadService:
    """Upload a batch of images and return their public URLs."""

    def __init__(self, store: ObjectStore, policy: Optional[UploadPolicy] = None):
        self.store = store
        self.policy = policy or UploadPolicy.from_settings()

    def _upload_one(self, key: str, file: IncomingFile) -> UploadedImage:
        self.store.put_object(key, file.data, file.content_type)
        return UploadedImage(
            key=key,
            url=self.store.public_url(key),
            content_type=file.content_type,
            size_bytes=file.size,
        )

    def _compensate(self, keys: list[str]) -> None:
        for key in keys:
            try:
                self.store.delete_object(key)
                logger.info(f"Removed orphaned upload {key}")
            except Exception as e:
                logger.warning(f"Could not remove orphaned upload {key}: {e}")

    async def upload_many(self, files: list[IncomingFile]) -> list[UploadedImage]:
        """Upload all files concurrently.

        Raises:
            UploadRejected: the batch violates the upload policy (nothing stored).
            StorageError: at least one upload failed (stored objects removed).
        """
        self.policy.check(files)

        keys = [make_object_key(f.filename) for f in files]
        results = await asyncio.gather(
            *(asyncio.to_thread(self._upload_one, key, f) for key, f in zip(keys, files)),
            return_exceptions=True,
        )

        failures = [r for r in results if isinstance(r, BaseException)]
        if failures:
            stored = [key for key, r in zip(keys, results) if not isinstance(r, BaseException)]
            logger.error(
                f"{len(failures)} of {len(files)} uploads failed; removing {len(stored)} stored objects",
                exc_info=failures[0],
            )
            await asyncio.to_thread(self._compensate, stored)
            raise StorageError(f"Failed to upload images: {failures[0]}") from failures[0]

        logger.info(f"Uploaded {len(results)} images")
        return list(results)
