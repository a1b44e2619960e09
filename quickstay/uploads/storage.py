"""
Google Cloud Storage client for image uploads
"""
import logging
from typing import Optional

from google.cloud import storage

from quickstay.config import settings
from quickstay.errors import StorageError

logger = logging.getLogger(__name__)


class GCSObjectStore:
    """Put/delete objects in a GCS bucket and build their public URLs.

    The underlying ``storage.Client`` is created on first use so the
    application can start without credentials (e.g. when uploads are not
    used).
    """

    def __init__(
        self,
        bucket_name: Optional[str] = None,
        project: Optional[str] = None,
        public_base_url: Optional[str] = None,
    ):
        self.bucket_name = bucket_name or settings.gcs_bucket
        self.project = project or settings.gcs_project
        self.public_base_url = (public_base_url or settings.public_base_url or "").rstrip("/")
        self._client = None
        self._bucket = None

    def _get_bucket(self):
        if not self.bucket_name:
            raise StorageError("Object storage bucket is not configured (QUICKSTAY_GCS_BUCKET)")
        if self._bucket is None:
            logger.info(f"Initialising GCS client for bucket {self.bucket_name}")
            self._client = storage.Client(project=self.project) if self.project else storage.Client()
            self._bucket = self._client.bucket(self.bucket_name)
        return self._bucket

    def put_object(self, key: str, data: bytes, content_type: str) -> None:
        blob = self._get_bucket().blob(key)
        blob.upload_from_string(data, content_type=content_type)

    def delete_object(self, key: str) -> None:
        self._get_bucket().blob(key).delete()

    def public_url(self, key: str) -> str:
        base = self.public_base_url or f"https://storage.googleapis.com/{self.bucket_name}"
        return f"{base}/{key}"
