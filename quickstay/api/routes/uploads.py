"""Image upload endpoint."""
from typing import List, Optional

from fastapi import APIRouter, Depends, File, UploadFile

from quickstay.api import responses
from quickstay.api.deps import get_upload_service
from quickstay.uploads import IncomingFile, UploadPolicy, UploadService

router = APIRouter()


async def read_within_limit(upload: UploadFile, policy: UploadPolicy) -> IncomingFile:
    """Read an uploaded file, never pulling more than one byte past the size limit."""
    filename = upload.filename or ""
    if upload.size is not None:
        policy.check_size(filename, upload.size)

    data = await upload.read(policy.max_file_size + 1)
    policy.check_size(filename, len(data))
    return IncomingFile(
        filename=filename,
        content_type=upload.content_type or "application/octet-stream",
        data=data,
    )


@router.post("/images", status_code=201)
async def upload_images(
    images: Optional[List[UploadFile]] = File(None),
    service: UploadService = Depends(get_upload_service),
):
    """Upload images (multipart field ``images``) and return their public URLs.

    Attach the returned URLs to a listing with a separate update call.
    """
    images = images or []
    service.policy.check_count(len(images))

    files = [await read_within_limit(f, service.policy) for f in images]
    uploaded = await service.upload_many(files)

    return responses.created(
        "Images uploaded successfully",
        {
            "images": [img.model_dump(by_alias=True) for img in uploaded],
            "count": len(uploaded),
        },
    )
