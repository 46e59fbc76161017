import logging
from typing import BinaryIO

import cloudinary
import cloudinary.exceptions
import cloudinary.uploader

from roomivo.core.config import settings
from roomivo.db.models.user import User
from roomivo.errors import DomainValidationError, ExternalServiceError, ForbiddenError, NotFoundError

logger = logging.getLogger(__name__)


def _configure() -> None:
    cloudinary.config(
        cloud_name=settings.cloudinary_cloud_name,
        api_key=settings.cloudinary_api_key,
        api_secret=settings.cloudinary_api_secret,
        secure=True,
    )


def user_folder(user: User) -> str:
    """Uploads are stored per user so ownership can be checked on delete."""
    return f"{settings.cloudinary_folder.rstrip('/')}/{user.id}"


def validate_image(content_type: str | None, size: int) -> None:
    """
    Raises:
        DomainValidationError: If the file is empty, not an image or too large
    """
    if size == 0:
        raise DomainValidationError("No image provided")
    if not content_type or not content_type.startswith("image/"):
        raise DomainValidationError("Only image files allowed")
    if size > settings.max_upload_bytes:
        raise DomainValidationError(
            f"Image exceeds the maximum size of {settings.max_upload_bytes} bytes"
        )


def upload_image(
    current_user: User, file: BinaryIO, content_type: str | None, size: int
) -> tuple[str, str]:
    """
    Upload an image to Cloudinary.

    Returns:
        Tuple of (secure url, public id)

    Raises:
        DomainValidationError: If the file is not an acceptable image
        ExternalServiceError: If Cloudinary rejects or fails the upload
    """
    validate_image(content_type, size)
    _configure()
    try:
        result = cloudinary.uploader.upload(
            file,
            folder=user_folder(current_user),
            resource_type="image",
            quality="auto",
            fetch_format="auto",
        )
    except (cloudinary.exceptions.Error, OSError) as e:
        logger.error("Cloudinary image upload error: %s", e)
        raise ExternalServiceError("Failed to upload image") from e

    logger.info("User %s uploaded image %s", current_user.id, result.get("public_id"))
    return result["secure_url"], result["public_id"]


def delete_image(current_user: User, public_id: str) -> None:
    """
    Delete one of the caller's images from Cloudinary.

    Raises:
        ForbiddenError: If the image is outside the caller's folder
        NotFoundError: If Cloudinary has no such image
        ExternalServiceError: If Cloudinary fails
    """
    if not public_id.startswith(f"{user_folder(current_user)}/"):
        raise ForbiddenError("You are not allowed to delete this image")

    _configure()
    try:
        result = cloudinary.uploader.destroy(public_id, resource_type="image")
    except (cloudinary.exceptions.Error, OSError) as e:
        logger.error("Cloudinary image delete error: %s", e)
        raise ExternalServiceError("Failed to delete image") from e

    if result.get("result") == "not found":
        raise NotFoundError("Image not found")
    if result.get("result") != "ok":
        logger.error("Unexpected Cloudinary delete result for %s: %s", public_id, result)
        raise ExternalServiceError("Failed to delete image")
