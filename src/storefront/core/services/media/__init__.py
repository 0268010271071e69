"""Media host client."""

from .cloudinary_service import (
    CloudinaryService,
    ImageFile,
    MediaUploadError,
    UploadedImage,
)

__all__ = ["CloudinaryService", "ImageFile", "MediaUploadError", "UploadedImage"]
