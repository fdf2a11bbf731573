"""
Cloudinary image upload helper functions
"""
import base64
import binascii
import logging
import re
import cloudinary
import cloudinary.exceptions
import cloudinary.uploader
from typing import Optional, Dict, Any
from fastapi import HTTPException
from closet.config import settings
from closet.core.exceptions import ExternalServiceError, ValidationError

logger = logging.getLogger(__name__)

"""Initialize Cloudinary with configuration from settings"""
def initialize_cloudinary():
    if settings.cloudinary_configured:
        cloudinary.config(
            cloud_name=settings.CLOUDINARY_CLOUD_NAME,
            api_key=settings.CLOUDINARY_API_KEY,
            api_secret=settings.CLOUDINARY_API_SECRET,
            secure=True
        )
        return True
    return False

"""Check if string is a base64 encoded image"""
def is_base64_image(image_data: str) -> bool:
    if not image_data:
        return False
    # Check for data URL format: data:image/...;base64,...
    return image_data.startswith('data:image/')

"""Extract base64 data from data URL"""
def extract_base64_data(data_url: str) -> Optional[str]:
    if not data_url:
        return None

    # Pattern: data:image/png;base64,iVBORw0KGgo...
    match = re.match(r'data:image/[^;]+;base64,(.+)', data_url)
    if match:
        return match.group(1)
    return None


def check_image_size(image_data: str) -> None:
    """Reject data URL payloads larger than MAX_IMAGE_SIZE bytes."""
    if not is_base64_image(image_data):
        return
    encoded = extract_base64_data(image_data)
    if not encoded:
        raise ValidationError("Invalid base64 image data", field="image")
    try:
        size = len(base64.b64decode(encoded, validate=True))
    except (binascii.Error, ValueError):
        raise ValidationError("Invalid base64 image data", field="image")
    if size > settings.MAX_IMAGE_SIZE:
        raise HTTPException(
            status_code=413,
            detail=f"Image exceeds the {settings.MAX_IMAGE_SIZE} byte limit"
        )

"""     Upload an image to Cloudinary
    Args:
        image_data: Base64 data URL or regular URL
        folder: Cloudinary sub-folder name (joined to settings.CLOUDINARY_FOLDER)
        public_id: Custom public ID for the image
        tags: List of tags to add to the image
    Returns:
        Dict with upload result including 'url' and 'public_id'
    Raises:
        ExternalServiceError: If the upload fails
"""
async def upload_image_to_cloudinary(
    image_data: str,
    folder: Optional[str] = None,
    public_id: Optional[str] = None,
    tags: Optional[list] = None
) -> Dict[str, Any]:

    # Regular URLs are stored as-is
    if not is_base64_image(image_data):
        return {
            "url": image_data,
            "public_id": None,
            "uploaded": False
        }

    initialize_cloudinary()

    base64_data = extract_base64_data(image_data)
    if not base64_data:
        raise ValidationError("Invalid base64 image data", field="image")

    upload_options: Dict[str, Any] = {
        "folder": f"{settings.CLOUDINARY_FOLDER}/{folder}" if folder else settings.CLOUDINARY_FOLDER,
        "resource_type": "image",
        "transformation": [
            {"quality": "auto:good"},
            {"fetch_format": "auto"}
        ]
    }

    if public_id:
        upload_options["public_id"] = public_id

    if tags:
        upload_options["tags"] = tags

    try:
        result = cloudinary.uploader.upload(
            f"data:image/png;base64,{base64_data}",
            **upload_options
        )
    except cloudinary.exceptions.Error as e:
        raise ExternalServiceError("Cloudinary", str(e))

    return {
        "url": result.get("secure_url"),
        "public_id": result.get("public_id"),
        "uploaded": True,
        "width": result.get("width"),
        "height": result.get("height"),
        "format": result.get("format"),
        "bytes": result.get("bytes")
    }


async def store_image(image_data: Optional[str], folder: str, tags: Optional[list] = None) -> Dict[str, Any]:
    """Persist an incoming image and return ``{"url", "public_id"}``.

    Uploads to Cloudinary when enabled and configured. Otherwise, or when the
    upload fails, the original value is kept as the image URL.
    """
    if not image_data:
        return {"url": None, "public_id": None}

    check_image_size(image_data)

    if settings.USE_CLOUDINARY and settings.cloudinary_configured:
        try:
            result = await upload_image_to_cloudinary(image_data, folder=folder, tags=tags)
            return {"url": result["url"], "public_id": result.get("public_id")}
        except ExternalServiceError as e:
            logger.warning(f"Falling back to original image data: {e.message}")

    return {"url": image_data, "public_id": None}


"""    Delete an image from Cloudinary
    Args:
        public_id: The Cloudinary public ID of the image
    Returns:
        bool: True if deletion was successful
"""
async def delete_image_from_cloudinary(public_id: Optional[str]) -> bool:
    if not public_id or not settings.cloudinary_configured:
        return False

    try:
        initialize_cloudinary()
        result = cloudinary.uploader.destroy(public_id)
        return result.get("result") == "ok"
    except cloudinary.exceptions.Error as e:
        logger.warning(f"Failed to delete image from Cloudinary: {e}")
        return False


def get_cloudinary_status() -> Dict[str, Any]:
    """Get Cloudinary configuration status"""
    return {
        "enabled": settings.USE_CLOUDINARY,
        "configured": settings.cloudinary_configured,
        "cloud_name": settings.CLOUDINARY_CLOUD_NAME if settings.cloudinary_configured else None,
        "folder": settings.CLOUDINARY_FOLDER
    }
