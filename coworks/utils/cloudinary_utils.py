import cloudinary
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError

from coworks.core.config import (
    CLOUDINARY_CLOUD_NAME,
    CLOUDINARY_API_KEY,
    CLOUDINARY_API_SECRET,
)
from coworks.core.logging_config import get_logger

logger = get_logger()

cloudinary.config(
    cloud_name=CLOUDINARY_CLOUD_NAME,
    api_key=CLOUDINARY_API_KEY,
    api_secret=CLOUDINARY_API_SECRET,
)


def upload_image(image_bytes: bytes, folder: str):
    try:
        result = cloudinary.uploader.upload(
            image_bytes,
            folder=folder,
            resource_type="image",
            format="jpg",          # force output as JPG
            quality="90"
        )

        return {
            "url": result.get("secure_url"),
            "public_id": result.get("public_id")
        }

    except CloudinaryError as e:
        logger.error(f"Cloudinary upload error: {e}")
        return None
