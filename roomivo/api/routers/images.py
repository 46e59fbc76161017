import os

from fastapi import APIRouter, Depends, File, UploadFile

from roomivo.api.deps import get_current_user
from roomivo.db.models.user import User
from roomivo.errors import DomainValidationError
from roomivo.schemas.image import ImageDeleteResponse, ImageUploadResponse
from roomivo.services.images import delete_image, upload_image

router = APIRouter(prefix="/images", tags=["images"])


@router.post("/upload", response_model=ImageUploadResponse)
def upload_property_image(
    image: UploadFile | None = File(None),
    current_user: User = Depends(get_current_user),
):
    """
    Upload a listing photo to the image CDN.

    Only ``image/*`` files up to 5 MB are accepted. The returned ``publicId``
    is what a listing stores and what ``DELETE /images/delete/{publicId}`` takes.
    """
    if image is None:
        raise DomainValidationError("No image provided")

    image.file.seek(0, os.SEEK_END)
    size = image.file.tell()
    image.file.seek(0)

    image_url, public_id = upload_image(current_user, image.file, image.content_type, size)
    return ImageUploadResponse(image_url=image_url, public_id=public_id)


@router.delete("/delete/{public_id:path}", response_model=ImageDeleteResponse)
def delete_property_image(
    public_id: str,
    current_user: User = Depends(get_current_user),
):
    """Delete one of the caller's uploaded images."""
    delete_image(current_user, public_id)
    return ImageDeleteResponse(message="Image deleted")
