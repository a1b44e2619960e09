"""Upload policy: which files the image endpoint accepts."""

import os
from dataclasses import dataclass, field

from quickstay.config import settings
from quickstay.errors import UploadRejected

ALLOWED_EXTENSIONS = (".png", ".jpg", ".jpeg", ".webp", ".gif")


@dataclass
class IncomingFile:
    """A file received from a multipart request, read into memory."""

    filename: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def extension(self) -> str:
        return os.path.splitext(self.filename or "")[1].lower()


@dataclass
class UploadPolicy:
    """Limits applied to a batch before anything is stored."""

    max_files: int = 10
    max_file_size_mb: int = 10
    allowed_extensions: tuple[str, ...] = field(default=ALLOWED_EXTENSIONS)

    @classmethod
    def from_settings(cls) -> "UploadPolicy":
        return cls(max_files=settings.max_upload_files, max_file_size_mb=settings.max_upload_mb)

    @property
    def max_file_size(self) -> int:
        return self.max_file_size_mb * 1024 * 1024

    def is_image(self, file: IncomingFile) -> bool:
        """Accept by extension or by image/* content type."""
        return file.extension in self.allowed_extensions or (file.content_type or "").startswith("image/")

    def check_count(self, count: int) -> None:
        """Reject empty or oversized batches; usable before reading file bodies."""
        if count == 0:
            raise UploadRejected("No images provided. Use field name 'images'.")
        if count > self.max_files:
            raise UploadRejected(f"Too many files. At most {self.max_files} images per request.")

    def check_size(self, filename: str, size: int) -> None:
        """Reject a file over the size limit; usable before reading its body."""
        if size > self.max_file_size:
            raise UploadRejected(f"File too large: {filename} exceeds {self.max_file_size_mb} MB")

    def check(self, files: list[IncomingFile]) -> None:
        """Validate a whole batch.

        Raises:
            UploadRejected: on the first file outside the policy.
        """
        self.check_count(len(files))
        for f in files:
            if not self.is_image(f):
                raise UploadRejected(f"Only image files are allowed: {f.filename}")
            self.check_size(f.filename, f.size)
